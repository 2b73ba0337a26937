"""Run the JSON API: ``python app.py`` (settings chosen by APP_ENV)."""

from src.time_tracker.time_tracker.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=app.config["DEBUG"])
