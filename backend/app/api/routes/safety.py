from fastapi import APIRouter

from app.schemas.medication_schema import SafetyReviewRequest
from app.services.medication_safety.catalog import get_catalog
from app.services.medication_safety.safety_review import PatientSafetyReview, SafetyReviewer

router = APIRouter()


@router.post("/review", response_model=PatientSafetyReview)
async def review_patient_safety(request: SafetyReviewRequest):
    """
    Run risk, dose, contraindication and interaction checks for a patient.
    Vitals and labs are reduced to the newest value per type first.
    """
    reviewer = SafetyReviewer(get_catalog())
    return reviewer.review(
        patient=request.patient,
        medications=request.medications,
        vitals=request.vitals,
        labs=request.labs,
    )
