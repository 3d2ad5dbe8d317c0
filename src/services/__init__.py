"""
Couche application (cas d'utilisation).

- field_merger : Fusion des resultats par priorite, completude, resolution du thumb
- identity : Strategies de resolution d'un nom vers une fiche existante
- source_runner : Execution des sources avec timeout et confinement des erreurs
- movie_coordinator / actor_coordinator : Sources -> fusion -> cache
- batch : Traitements par lot et reconciliation des films
- library : Codes des films presents dans la bibliotheque
"""
