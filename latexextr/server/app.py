from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from loguru import logger
from starlette.background import BackgroundTask

from latexextr.config import Settings, load_settings
from latexextr.extractor.models import ConversionFailed, MathExtractorError
from latexextr.extractor.pipeline import DocumentJob, cleanup_files, ensure_directories

UPLOAD_CHUNK_SIZE = 1024 * 1024


async def _save_upload(upload: UploadFile, temp_dir: Path) -> Path:
    # Random name like a multipart temp file; the original name is only used
    # for the derived LaTeX/output filenames.
    dest = Path(temp_dir) / uuid.uuid4().hex
    try:
        async with aiofiles.open(dest, "wb") as f:
            while True:
                chunk = await upload.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                await f.write(chunk)
    except OSError as e:
        cleanup_files([dest])
        raise ConversionFailed(f"Could not store uploaded file: {e}") from e
    return dest


def _job_paths(job: Optional[DocumentJob], upload_path: Optional[Path]) -> list[Path]:
    if job is not None:
        return job.cleanup_paths()
    return [upload_path] if upload_path is not None else []


def _error_response(message: str) -> PlainTextResponse:
    return PlainTextResponse(f"Error: {message}", status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="latexextr", version="0.1.0")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["POST", "GET"],
        allow_headers=["Content-Type"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/convert", response_class=PlainTextResponse)
    async def convert_status() -> str:
        logger.info("Received GET request")
        return "Server is running"

    @app.post("/convert")
    async def convert(file: Optional[UploadFile] = File(None)):
        logger.info("Received POST request")

        job: Optional[DocumentJob] = None
        upload_path: Optional[Path] = None
        try:
            ensure_directories(settings)

            if file is None or not file.filename:
                raise ConversionFailed("No file uploaded. Please select a file.")

            upload_path = await _save_upload(file, settings.temp_dir)
            job = DocumentJob(upload_path, file.filename, settings=settings, job_id=upload_path.name)
            output_path = await job.aprocess()
        except MathExtractorError as e:
            logger.error(f"Conversion failed: {e}")
            cleanup_files(_job_paths(job, upload_path))
            return _error_response(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error while converting upload: {e}")
            cleanup_files(_job_paths(job, upload_path))
            return _error_response(str(e) or e.__class__.__name__)
        finally:
            if file is not None:
                await file.close()

        return FileResponse(
            output_path,
            media_type="text/plain",
            filename=f"{job.file_name}.txt",
            content_disposition_type="attachment",
            background=BackgroundTask(cleanup_files, job.cleanup_paths()),
        )

    return app


app = create_app()
