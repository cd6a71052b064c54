"""
Job Description Routes

Description:
Create and fetch the job descriptions interview sessions are conducted for.

Dependencies:
- fastapi: For creating routes.
- sqlalchemy: For persistence through the request-scoped session.
- loguru: For logging.
"""
import uuid
from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.orm import Session
from interview_core.core.identity import get_requester_id
from interview_core.database import get_db_session
from interview_core.errors.exceptions import JobNotFound
from interview_core.models.interview_models import JobDescription
from interview_core.schemas.interview_schemas import JobCreateRequest, JobResponse

router = APIRouter(
    prefix="/api/jobs",
    tags=["jobs"],
    responses={404: {"description": "Not found"}}
)


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    request: JobCreateRequest,
    requester_id: str = Depends(get_requester_id),
    db: Session = Depends(get_db_session),
):
    job = JobDescription(
        title=request.title,
        company=request.company,
        description=request.description,
        required_skills=request.required_skills,
        created_by=requester_id,
    )
    db.add(job)
    db.commit()
    logger.info(f"Created job description {job.id}")
    return job


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    db: Session = Depends(get_db_session),
):
    job = db.get(JobDescription, job_id)
    if job is None:
        raise JobNotFound(str(job_id))
    return job
