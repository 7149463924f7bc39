import aiohttp_cors
from aiohttp import web

from esplora_batch.web.controllers.routes import register_routes


def init_cors(app: web.Application):
    # Configure default CORS settings.
    cors = aiohttp_cors.setup(
        app,
        defaults={
            "*": aiohttp_cors.ResourceOptions(
                allow_methods=["GET", "POST"],
                allow_credentials=True,
                expose_headers="*",
                allow_headers="*",
            )
        },
    )

    # Configure CORS on all routes.
    for route in list(app.router.routes()):
        cors.add(route)


def create_aiohttp_app(client_max_size: int = 1024**2 * 4) -> web.Application:
    app = web.Application(client_max_size=client_max_size)

    register_routes(app)
    init_cors(app)

    return app
