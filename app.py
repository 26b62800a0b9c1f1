"""
Cursalia - WSGI entry point

Run with ``flask --app app run`` or point a WSGI server at ``app:app``.
FLASK_CONFIG selects the configuration (development, production, testing).
"""
import os

from cursalia import create_app

app = create_app(os.getenv('FLASK_CONFIG'))

if __name__ == '__main__':
    app.run(host=os.getenv('HOST', '127.0.0.1'), port=int(os.getenv('PORT', 5000)))
