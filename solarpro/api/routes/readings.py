"""Reading routes for listing, recording and deleting daily totals."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from solarpro.api.dependencies import get_current_admin
from solarpro.core.database import get_db
from solarpro.models.user import User
from solarpro.schemas.reading import DerivedReading, ReadingCreate, ReadingResponse
from solarpro.services import readings as reading_service

router = APIRouter(prefix="/readings", tags=["readings"])


@router.get("/", response_model=list[ReadingResponse])
def list_readings(db: Session = Depends(get_db)):
    """List all stored readings, oldest first."""
    return reading_service.list_all(db)


@router.get("/derived", response_model=list[DerivedReading])
def list_derived_readings(db: Session = Depends(get_db)):
    """List all readings with self-used, consumed and efficiency."""
    return reading_service.get_derived_readings(db)


@router.post(
    "/",
    response_model=ReadingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_reading(
    reading_data: ReadingCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Record one day of meter totals."""
    return reading_service.insert_reading(db, reading_data)


@router.delete("/{reading_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reading(
    reading_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Response:
    """Delete a reading by ID."""
    if not reading_service.delete_reading(db, reading_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reading not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
