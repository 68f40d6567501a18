"""Provides application for development purposes."""

from quizplatform.factory import create_app

app = create_app()
