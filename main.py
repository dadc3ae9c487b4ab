"""
Storefront entry point

    python main.py
    sanic main:app --host 0.0.0.0 --port 8000
"""
from storefront.application import create_app
from storefront.support import Config

app = create_app()


if __name__ == '__main__':
    app.run(
        host=Config.get('app.APP_HOST', '0.0.0.0'),
        port=Config.get('app.APP_PORT', 8000),
        debug=Config.get('app.APP_DEBUG', False),
        single_process=True,
    )
