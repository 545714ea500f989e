"""
FastAPI routes for chemical lookup and storage classification.
Thin API layer over ChemicalService.
"""
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException

from core.config import get_settings
from core.exceptions import ChemicalNotFoundError, LLMError
from core.logger import setup_logger
from core.schema import CategoryDescription, ChemicalInfo
from services.chemical_service import ChemicalService

logger = setup_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Chemical Storage Classification",
    description="Look up GHS hazard data by CAS number and assign a storage category",
    version="1.0.0"
)

# Service instance, created on first request
_service: Optional[ChemicalService] = None


def get_chemical_service() -> ChemicalService:
    """Return the shared ChemicalService, creating it on first use."""
    global _service
    if _service is None:
        _service = ChemicalService()
    return _service


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": get_settings().app_name,
        "version": "1.0.0"
    }


@app.get("/categories", response_model=List[CategoryDescription])
async def list_categories(service: ChemicalService = Depends(get_chemical_service)):
    """List storage categories with display labels."""
    return service.list_categories()


@app.get("/chemicals/{cas}", response_model=ChemicalInfo)
async def lookup_chemical(cas: str, service: ChemicalService = Depends(get_chemical_service)):
    """
    Look up a chemical by CAS number.

    Args:
        cas: CAS registry number

    Returns:
        ChemicalInfo with storage category and label
    """
    try:
        return await service.lookup(cas)

    except ChemicalNotFoundError as e:
        raise HTTPException(
            status_code=404,
            detail={"message": e.message, "details": e.details}
        )

    except LLMError as e:
        logger.error(f"Lookup failed for CAS {cas}: {e.message}")
        raise HTTPException(
            status_code=502,
            detail={"message": e.message, "details": e.details}
        )


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
