"""
Couche infrastructure de MediaScrape.

Implementations concretes des ports de persistance :

- persistence/ : Cache films ({code}.json), cache acteurs ({id}.nfo) et
  index des noms (actors-index.json), tous ecrits par remplacement atomique
"""
