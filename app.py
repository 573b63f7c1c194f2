#!/usr/bin/env python3
"""
Main entry point for the link shortener service.

Concurrency: requests are handled concurrently via async I/O (FastAPI +
asyncpg connection pool). The only shared mutable resource is the links
table; cross-request coordination is left to its unique index. Set
WORKERS > 1 for multi-process scaling (each worker has its own DB pool).

Usage:
    python app.py

Environment variables:
    DATABASE_URL - postgresql://... or memory://
    CREATE_TABLES - Set to true to create the links table on startup
    BASE_URL - Base URL for short links
    AUTH_JWT_SECRET - Secret used to verify identity provider tokens
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlinks.actions import LinkActions
from shortlinks.auth import JWTIdentityProvider
from shortlinks.database import create_link_store
from shortlinks.links import LinkRepository
from shortlinks.revalidation import Revalidator
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


def build_components(config: Config, logger):
    """Create the store handle and everything that depends on it.

    Returns:
        Tuple of (store, actions)
    """
    store = create_link_store(
        config.database_url,
        pool_max_size=config.db_pool_max_size,
        create_tables=config.create_tables,
        logger=logger.getChild("store"),
    )
    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        max_attempts=config.max_generation_attempts,
        logger=logger.getChild("shortcode"),
    )
    repository = LinkRepository(
        store=store,
        short_code_generator=generator,
        logger=logger.getChild("links"),
    )
    identity_provider = JWTIdentityProvider(
        secret=config.auth_jwt_secret,
        algorithms=[config.auth_jwt_algorithm],
        audience=config.auth_jwt_audience,
        logger=logger.getChild("auth"),
    )
    actions = LinkActions(
        repository=repository,
        identity_provider=identity_provider,
        revalidator=Revalidator(logger=logger.getChild("revalidation")),
        logger=logger.getChild("actions"),
    )
    return store, actions


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting link shortener service...")
    if not config.auth_jwt_secret:
        logger.warning("AUTH_JWT_SECRET is not set; every link operation will be rejected as Unauthorized")

    store, actions = build_components(config, logger)
    if config.create_tables:
        await store.ensure_schema()

    app.state.store = store
    app.state.actions = actions
    app.state.repository = actions.repository

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down link shortener service...")
    await store.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'auth_jwt_secret', 'database_url'})}")

    # Store and actions are created in the lifespan
    app = create_app(
        store_instance=None,
        actions_instance=None,
        config=config,
    )

    app.state.config = config
    app.state.logger = logger

    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
