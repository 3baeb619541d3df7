"""Mini README: HTTP interface for Pizzadrone.

Exports the FastAPI application factory serving the distance, region,
order validation and delivery path endpoints. The CLI in
``main_control_centre.py`` launches it through uvicorn.
"""

from .web_app import create_application

__all__ = ["create_application"]
