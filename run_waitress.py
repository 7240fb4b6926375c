"""
Run the complaint analysis service with the Waitress WSGI server
"""
from waitress import serve
from main import app

if __name__ == '__main__':
    settings = app.config['SETTINGS']

    print("\n" + "="*70)
    print(f"Starting Claude complaint analysis service on {settings.host}:{settings.port}")
    print(f"Provider key configured: {settings.has_api_key}")
    print("="*70 + "\n")

    serve(app, host=settings.host, port=settings.port, threads=4)
