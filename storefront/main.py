from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.engine import Engine
from storefront.version import VERSION
from storefront.api import users, products, orders
from storefront.core.config import Settings, settings as default_settings
from storefront.core.errors import install_error_handlers
from storefront.core.logging import setup_logging
from storefront.db.session import make_engine, make_session_factory

def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings
    log = setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title='Storefront API', version=VERSION)
    app.state.engine = engine if engine is not None else make_engine(settings.POSTGRES_DSN)
    app.state.session_factory = make_session_factory(app.state.engine)

    if settings.ENABLE_METRICS:
        # Instrument the app BEFORE adding routes or middleware
        Instrumentator().instrument(app).expose(app, include_in_schema=False, endpoint='/metrics', should_gzip=True)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    install_error_handlers(app)

    @app.get('/health')
    def health(): return {'status': 'ok'}

    @app.get('/v1/_info')
    def info(): return {'service': 'storefront', 'version': VERSION}

    @app.on_event('startup')
    async def startup_event():
        for route in app.routes:
            if hasattr(route, 'methods') and hasattr(route, 'path'):
                log.info('%s %s', sorted(route.methods), route.path)

    app.include_router(users.router,    prefix='/users',    tags=['users'])
    app.include_router(products.router, prefix='/products', tags=['products'])
    app.include_router(orders.router,   prefix='/orders',   tags=['orders'])
    return app

def run():
    import uvicorn
    uvicorn.run('storefront.main:create_app', factory=True, host='0.0.0.0', port=default_settings.PORT)

if __name__ == '__main__':
    run()
