"""
Couche adaptateurs.

Les adaptateurs implementent les ports definis dans core/ports/ :
- http/ : Session de scraping httpx, cache de pages, retry sur 429
- sources/ : Sources de films et d'acteurs (sous-processus, HTTP, cache local)
- nfo/ : Codec XML des fiches acteurs
- confirmation.py : Canaux de confirmation (automatique, console, callback)
- cli/ : Interface ligne de commande (Typer + Rich)

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""
