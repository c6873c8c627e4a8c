# app/users.py
from pathlib import Path
from xml.etree import ElementTree

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .config import Settings, get_settings
from .params import first_value
from .schemas import UserIn

router = APIRouter(tags=["users"])

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
XML_TYPES = ("application/xml", "text/xml")


def get_templates(settings: Settings = Depends(get_settings)) -> Jinja2Templates:
    return Jinja2Templates(directory=settings.templates_dir)


async def bind_user(request: Request) -> UserIn:
    """Fill a UserIn from the body, picking the decoder by Content-Type."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    try:
        if content_type == "application/json":
            body = await request.body()
            data = await request.json() if body else {}
        elif content_type in FORM_TYPES:
            data = dict(await request.form())
        elif content_type in XML_TYPES:
            body = await request.body()
            data = {child.tag: child.text or "" for child in ElementTree.fromstring(body)} if body else {}
        else:
            if await request.body():
                raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail="Unsupported Media Type")
            data = {}
        return UserIn.model_validate(data)
    except (ValueError, ElementTree.ParseError, ValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/users/{user_id}", response_class=PlainTextResponse)
async def get_user(user_id: str):
    return user_id


@router.post("/users", response_model=UserIn, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserIn = Depends(bind_user)):
    return user


@router.get("/show", response_class=PlainTextResponse)
async def show(request: Request):
    team = first_value(request.query_params, "team")
    member = first_value(request.query_params, "member")
    return f"team:{team}, member:{member}"


@router.post("/save", response_class=PlainTextResponse)
async def save(request: Request):
    form = await request.form()
    return f"name:{first_value(form, 'name')}, email:{first_value(form, 'email')}"


@router.post("/multisave", response_class=HTMLResponse)
async def multi_save(
    request: Request,
    avatar: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
    templates: Jinja2Templates = Depends(get_templates),
):
    name = first_value(await request.form(), "name")
    try:
        filename = Path(avatar.filename or "").name
        if not filename:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="avatar has no filename")

        content = await avatar.read()
        await run_in_threadpool((Path(settings.upload_dir) / filename).write_bytes, content)
    finally:
        await avatar.close()

    return templates.TemplateResponse(request, "thank_you.html", {"name": name})
