"""FastAPI application: PDF upload parsing and resume rendering."""

from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, File, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from resume_builder import __version__
from resume_builder.config import AppConfig
from resume_builder.exceptions import RenderError, ResumeBuilderError
from resume_builder.handler import DocumentHandler
from resume_builder.logger import get_logger, set_request_id
from resume_builder.renderer import ResumeRenderer
from resume_builder.resume import ResumeData

logger = get_logger(__name__)

NO_CACHE = {"Cache-Control": "no-cache"}

PARSE_SERVICE_ERROR = (
    "PDF parsing service encountered an error. "
    "Please try uploading a DOCX or TXT file instead."
)
RENDER_SERVICE_ERROR = "Resume rendering service encountered an error."


def _json(payload: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers=NO_CACHE)


def _content_disposition(disposition: str, file_name: str) -> str:
    if file_name.isascii():
        return f'{disposition}; filename="{file_name}"'
    return f"{disposition}; filename*=utf-8''{quote(file_name)}"


def create_app(
    config: Optional[AppConfig] = None,
    handler: Optional[DocumentHandler] = None,
    renderer: Optional[ResumeRenderer] = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Service configuration. If None, uses defaults.
        handler: Upload handler. If None, creates one from config.
        renderer: Resume renderer. If None, creates one from config.
    """
    config = config or AppConfig()
    handler = handler or DocumentHandler(config=config.extraction)
    renderer = renderer or ResumeRenderer(config.render)

    app = FastAPI(title="Resume Builder API", version=__version__)
    app.state.config = config
    app.state.handler = handler
    app.state.renderer = renderer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = set_request_id(request.headers.get("X-Request-ID"))
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.warning(
            "Rejected malformed request",
            extra_data={"path": request.url.path, "errors": len(exc.errors())},
        )
        return _json({"error": "Invalid request", "details": str(exc.errors())}, 400)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "structured_parser": handler.pipeline.has_structured_parser,
        }

    @app.post("/api/parse-pdf")
    async def parse_pdf(file: Optional[UploadFile] = File(None)):
        """Extract text from an uploaded PDF resume."""
        try:
            if file is None:
                file_bytes, mime_type, file_name = None, None, None
            else:
                file_bytes = await file.read()
                mime_type, file_name = file.content_type, file.filename

            result = await run_in_threadpool(
                handler.extract, file_bytes, mime_type, file_name
            )
        except ResumeBuilderError as exc:
            return _json(exc.to_dict(), 400)
        except Exception as exc:
            logger.exception(
                "PDF parsing request failed",
                extra_data={"error_type": type(exc).__name__},
            )
            return _json({"error": PARSE_SERVICE_ERROR, "details": str(exc)}, 500)

        return _json(result.to_dict())

    @app.get("/api/templates")
    async def list_templates():
        return _json(
            {
                "templates": list(renderer.templates),
                "default": renderer.resolve_template(None),
            }
        )

    @app.post("/api/render")
    async def render_resume(
        resume: ResumeData,
        output: str = Query("pdf", alias="format", pattern="^(pdf|html)$"),
    ):
        """Render resume data as a PDF download or a print-ready HTML page."""
        try:
            if output == "html":
                html = await run_in_threadpool(renderer.render_print_html, resume)
                return HTMLResponse(html, headers=NO_CACHE)

            rendered = await run_in_threadpool(renderer.export, resume)
        except RenderError as exc:
            return _json(exc.to_dict(), 400)
        except Exception as exc:
            logger.exception(
                "Resume rendering request failed",
                extra_data={"error_type": type(exc).__name__},
            )
            return _json({"error": RENDER_SERVICE_ERROR, "details": str(exc)}, 500)

        headers = dict(NO_CACHE)
        if rendered.fallback:
            headers["X-Render-Fallback"] = "print"
            headers["Content-Disposition"] = _content_disposition(
                "inline", rendered.file_name
            )
        else:
            headers["Content-Disposition"] = _content_disposition(
                "attachment", rendered.file_name
            )
        return Response(rendered.content, media_type=rendered.media_type, headers=headers)

    return app
