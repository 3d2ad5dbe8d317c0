"""
MediaScrape - Scraping de metadonnees de films et d'acteurs.

Le package interroge plusieurs sources pour chaque film (par code) et chaque
acteur (par nom), fusionne les resultats champ par champ selon des priorites
configurables et les conserve dans des caches fichiers locaux.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (fusion, identite, coordinateurs, batch)
- adapters/ : Sources, session HTTP, codec NFO, CLI
- infrastructure/ : Caches films/acteurs et index des noms
"""
