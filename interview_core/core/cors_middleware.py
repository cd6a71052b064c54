"""
Description:
Module for adding CORS middleware to the FastAPI application. Allowed origins
come from the CORS_ORIGINS environment variable.

Dependencies:
- fastapi: For the FastAPI application and CORS middleware.
- loguru: For logging information about the middleware setup.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from interview_core.core import config


def add_cors_middleware(app: FastAPI):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS middleware added for {len(config.CORS_ORIGINS)} origins")
