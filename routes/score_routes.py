import logging
import os
import uuid
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from errors import EvaluationError, ExtractionError
from evaluator import ResumeEvaluator
from models.evaluation_model import ErrorResponse, EvaluationResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Resume Scoring"])

NO_FILE_MESSAGE = "No file uploaded."
SCORING_FAILED_MESSAGE = "Failed to score resume."
INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_REQUEST_MESSAGE = "Invalid request."


def _remove_temp_file(file_location: Optional[str]) -> None:
    if file_location and os.path.exists(file_location):
        try:
            os.remove(file_location)
            logger.info(f"Temporary file deleted: {file_location}")
        except OSError as e:
            logger.warning(f"Could not delete temporary file {file_location}: {e}")


# ✅ Score an uploaded resume
@router.post(
    "/score-resume",
    responses={
        200: {"model": EvaluationResult},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def score_resume(request: Request, resume: Optional[UploadFile] = File(None)):
    """
    Extracts the text of the uploaded resume, has the model score it against
    the rubric and returns the model's verdict.

    The upload is spooled to a temporary file which is removed whether
    scoring succeeds or fails.
    """
    if resume is None or not resume.filename:
        raise HTTPException(status_code=400, detail=NO_FILE_MESSAGE)

    evaluator: ResumeEvaluator = request.app.state.evaluator
    upload_dir: str = request.app.state.settings.upload_dir
    logger.info(f"Scoring request received for '{resume.filename}'")

    file_location = None
    try:
        temp_filename = f"temp_{uuid.uuid4().hex}_{os.path.basename(resume.filename)}"
        file_location = os.path.join(upload_dir, temp_filename)

        with open(file_location, "wb") as buffer:
            contents = await resume.read()
            buffer.write(contents)
        logger.info(f"Temporary file saved for '{resume.filename}' at: {file_location}")

        result = await evaluator.score_file(file_location)

    except ExtractionError as e:
        logger.error(f"Text extraction failed for '{resume.filename}': {e}")
        raise HTTPException(status_code=500, detail=SCORING_FAILED_MESSAGE)
    except EvaluationError as e:
        logger.error(f"Evaluation failed for '{resume.filename}' ({e.kind.value}): {e}")
        if e.raw_output is not None:
            logger.error(f"Offending model output for '{resume.filename}':\n{e.raw_output}")
        raise HTTPException(status_code=500, detail=SCORING_FAILED_MESSAGE)
    except Exception as e:
        logger.exception(f"Unexpected error while scoring '{resume.filename}': {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
    finally:
        _remove_temp_file(file_location)
        await resume.close()

    result_log = request.app.state.result_log
    if result_log is not None:
        result_log.append(result, filename=resume.filename)

    logger.info(f"Scored '{resume.filename}': score={result.score}")
    return JSONResponse(content=result.model_dump(mode="json"))
