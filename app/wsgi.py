from app.cookenu import create_app

app = create_app()
