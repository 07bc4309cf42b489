"""Admin-only pages for creating, editing and deleting films."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData, UploadFile
from starlette.responses import Response

from cinearchive.database import get_db
from cinearchive.errors import FilmNotFound, QueryFailed, StorageError
from cinearchive.models import Film
from cinearchive.schemas.film import FilmInput, parse_ids, split_names
from cinearchive.services import reference_data
from cinearchive.services.film_editor import ImageUpload, create_film, delete_film, update_film
from cinearchive.services.film_search import get_film
from cinearchive.web.templating import admin_required, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["editor"], dependencies=[Depends(admin_required)])


async def form_options(db: AsyncSession) -> dict[str, list]:
    """Existing reference rows offered by the film form's selects."""
    return {
        "directors": await reference_data.list_directors(db),
        "countries": await reference_data.list_countries(db),
        "genres": await reference_data.list_genres(db),
        "keywords": await reference_data.list_keywords(db),
    }


async def read_image(form: FormData) -> ImageUpload | None:
    """The uploaded image, or None when the file input was left empty."""
    upload = form.get("image")
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    content = await upload.read()
    if not content:
        return None
    return ImageUpload(filename=upload.filename, content=content, content_type=upload.content_type)


SCALAR_FIELDS = ("title", "description", "release_date", "language", "runtime", "type", "image_url", "boost")
# relationship -> form field stem
LINKS = {"directors": "director", "countries": "country", "genres": "genre", "keywords": "keyword"}


def submitted_values(form: FormData) -> dict[str, Any]:
    """Field values echoed back from a submission that failed validation."""
    values: dict[str, Any] = {}
    for field in SCALAR_FIELDS:
        value = form.get(field)
        values[field] = value if isinstance(value, str) else None
    values["boost"] = form.get("boost") in ("on", "true", "1")
    for stem in LINKS.values():
        values[f"{stem}_ids"] = parse_ids(form.getlist(f"{stem}_ids"))
    for stem in ("director", "genre", "keyword"):
        values[f"{stem}_names"] = ", ".join(split_names(form.getlist(f"{stem}_names")))
    return values


def form_values(source: Film | FilmInput | FormData | None) -> dict[str, Any]:
    """Field values for the film form, from a stored film or a rejected submission."""
    if source is None:
        return {}
    if isinstance(source, FormData):
        return submitted_values(source)
    values: dict[str, Any] = {field: getattr(source, field) for field in SCALAR_FIELDS}
    if isinstance(source, FilmInput):
        for stem in LINKS.values():
            values[f"{stem}_ids"] = list(getattr(source, f"{stem}_ids"))
        for stem in ("director", "genre", "keyword"):
            values[f"{stem}_names"] = ", ".join(getattr(source, f"{stem}_names"))
    else:
        for link, stem in LINKS.items():
            values[f"{stem}_ids"] = [row.id for row in getattr(source, link)]
    return values


def _validation_message(e: ValidationError) -> str:
    return "; ".join(str(err["msg"]).removeprefix("Value error, ") for err in e.errors())


async def _form_page(
    request: Request,
    db: AsyncSession,
    action: str,
    film: Film | FilmInput | FormData | None,
    error: str | None = None,
    status_code: int = 200,
) -> Response:
    try:
        options = await form_options(db)
    except QueryFailed as e:
        options = {}
        error = error or f"Error loading form data: {e.message}"
    return render(
        request,
        "form.html",
        status_code=status_code,
        action=action,
        values=form_values(film),
        options=options,
        error=error,
    )


@router.get("/movies/create", response_class=HTMLResponse)
async def create_page(request: Request, db: AsyncSession = Depends(get_db)) -> Response:
    return await _form_page(request, db, "/movies/create", film=None)


@router.post("/movies/create")
async def create_submit(request: Request, db: AsyncSession = Depends(get_db)) -> Response:
    form = await request.form()
    try:
        data = FilmInput.from_form(form)
    except ValidationError as e:
        return await _form_page(
            request, db, "/movies/create", film=form, error=_validation_message(e), status_code=400
        )

    try:
        film = await create_film(db, data, image=await read_image(form))
    except StorageError as e:
        return await _form_page(
            request, db, "/movies/create", film=data, error=f"Image upload failed: {e}", status_code=502
        )
    except QueryFailed as e:
        return await _form_page(
            request, db, "/movies/create", film=data, error=f"Error saving film: {e.message}", status_code=503
        )
    return RedirectResponse(f"/movies/{film.id}", status_code=303)


@router.get("/movies/edit/{film_id}", response_class=HTMLResponse)
async def edit_page(
    request: Request,
    film_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        film = await get_film(db, film_id)
    except FilmNotFound:
        raise HTTPException(status_code=404, detail="Film not found")
    except QueryFailed as e:
        return await _form_page(
            request, db, f"/movies/edit/{film_id}", film=None, error=f"Error loading film: {e.message}", status_code=503
        )
    return await _form_page(request, db, f"/movies/edit/{film_id}", film=film)


@router.post("/movies/edit/{film_id}")
async def edit_submit(
    request: Request,
    film_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    action = f"/movies/edit/{film_id}"
    form = await request.form()
    try:
        data = FilmInput.from_form(form)
    except ValidationError as e:
        return await _form_page(request, db, action, film=form, error=_validation_message(e), status_code=400)

    try:
        await update_film(db, film_id, data, image=await read_image(form))
    except FilmNotFound:
        raise HTTPException(status_code=404, detail="Film not found")
    except StorageError as e:
        return await _form_page(request, db, action, film=data, error=f"Image upload failed: {e}", status_code=502)
    except QueryFailed as e:
        return await _form_page(
            request, db, action, film=data, error=f"Error saving film: {e.message}", status_code=503
        )
    return RedirectResponse(f"/movies/{film_id}", status_code=303)


@router.post("/movies/{film_id}/delete")
async def delete_submit(film_id: str, db: AsyncSession = Depends(get_db)) -> Response:
    try:
        await delete_film(db, film_id)
    except FilmNotFound:
        raise HTTPException(status_code=404, detail="Film not found")
    except QueryFailed as e:
        raise HTTPException(status_code=503, detail=f"Error deleting film: {e.message}")
    return RedirectResponse("/movies", status_code=303)
