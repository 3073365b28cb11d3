"""Development entrypoint: ``python app.py``."""

from src.project_tracker.project_tracker.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG", False)))
