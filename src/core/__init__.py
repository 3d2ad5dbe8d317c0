"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dependance vers l'infrastructure (adapters, caches, HTTP).

Sous-packages :
- entities/ : Fiches acteurs, references d'acteurs, films et enveloppes
- ports/ : Contrats des caches, de l'index, des sources, de la session et de la confirmation
- value_objects/ : Resultats de source, resultats de fetch, evenements de progression
"""
