"""
FormPilot API

Serves form definitions and evaluates wizard snapshots for a rendering
client; forwards completed forms to the comparison backend.
"""

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import comparison, forms, health
from formpilot import __version__
from formpilot.definitions import FormDefinitionLoader
from formpilot.exceptions import FormPilotError
from formpilot.gateway import ComparisonGateway, GatewayConfig

DEFAULT_FORMS_DIR = Path(__file__).parent.parent / "forms"


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        if hasattr(record, "category"):
            log_entry["category"] = record.category
        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms
        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def configure_logging(level: str) -> logging.Logger:
    """Attach the JSON handler to the formpilot logger once."""
    root = logging.getLogger("formpilot")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    return root


# Configuration is read once here and passed down explicitly
config = GatewayConfig.from_env()
logger = configure_logging(config.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load form definitions and open the gateway on startup."""
    forms_dir = Path(config.forms_dir) if config.forms_dir else DEFAULT_FORMS_DIR
    loader = FormDefinitionLoader()

    try:
        definitions = loader.load_directory(forms_dir)
    except FormPilotError as e:
        logger.error("Failed to load form definitions: %s", e)
        raise
    logger.info("Loaded %d form definitions from %s", len(definitions), forms_dir)

    gateway = ComparisonGateway(config)

    # Share loader and gateway with routes
    forms.set_loader(loader)
    comparison.set_gateway(gateway)

    yield

    logger.info("Shutting down...")
    gateway.close()


# Create app
app = FastAPI(
    title="FormPilot API",
    description="""
**Conditional form engine for insurance comparison wizards.**

## Quick Start

1. `GET /forms` - See available comparison categories
2. `POST /forms/{category}/evaluate` - Visible steps, errors and progress for a value snapshot
3. `POST /forms/{category}/submit` - Compare offers for a completed form
    """,
    version=__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(forms.router)
app.include_router(comparison.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
