"""
WSGI entry point
Imports the Flask app from main.py and exposes it for waitress/gunicorn
"""
from main import app

if __name__ == "__main__":
    app.run()
