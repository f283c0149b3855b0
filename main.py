"""
Interaction Contract API Entry Point

Use this file for deployment:
  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging
import os

from fastapi import FastAPI

from interaction_contract import __version__
from interaction_contract.admin import router as contract_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Interaction Contract API",
    version=__version__,
)

app.include_router(contract_router)
logger.info("Interaction contract endpoints registered")


@app.get("/health")
def health():
    return {"status": "healthy", "version": __version__}


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
