from locations_cache.cli import app

app()
