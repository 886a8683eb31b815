"""External lookups proxy.

Postal codes come from ViaCEP, the state and city directories from IBGE,
and WhatsApp messages go through an optional provider API. When no provider
is configured, or the provider fails, a wa.me click-to-chat link is returned
instead.

The browser calls these through the backend to avoid CORS issues and to keep
the WhatsApp provider key server-side.
"""

import logging
from typing import Any, AsyncIterator, Optional
from urllib.parse import quote

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from .. import config
from ..auth import get_current_user
from ..models import User
from ..shared.validators import digits_only

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/external-apis", tags=["External APIs"])

CEP_TIMEOUT = 5.0
DIRECTORY_TIMEOUT = 10.0
WHATSAPP_TIMEOUT = 10.0

# Characters encodeURIComponent leaves untouched, so links match what browsers build
URI_COMPONENT_SAFE = "-_.!~*'()"


class AddressLookup(BaseModel):
    cep: str
    street: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


class StateItem(BaseModel):
    id: int
    sigla: str
    nome: str


class CityItem(BaseModel):
    id: int
    nome: str


class WhatsappRequest(BaseModel):
    phone: str
    message: str = Field(default="")


class WhatsappLinkResponse(BaseModel):
    link: str


class WhatsappSendResponse(BaseModel):
    sent: bool
    link: Optional[str] = None
    providerResponse: Optional[Any] = None


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Dependency providing an HTTP client for upstream calls"""
    async with httpx.AsyncClient() as client:
        yield client


def build_whatsapp_link(phone: str, message: str) -> str:
    """
    Click-to-chat link for a phone number

    Raises:
        HTTPException: 400 if the phone has fewer than 10 digits
    """
    digits = digits_only(phone)
    if len(digits) < 10:
        raise HTTPException(status_code=400, detail="Invalid phone number")
    return f"https://wa.me/{digits}?text={quote(message, safe=URI_COMPONENT_SAFE)}"


@router.get("/cep/{cep}", response_model=AddressLookup)
async def get_address_by_cep(cep: str, client: httpx.AsyncClient = Depends(get_http_client)):
    """Resolve a CEP to street, neighborhood, city and state"""
    clean_cep = digits_only(cep)
    if len(clean_cep) != 8:
        raise HTTPException(status_code=400, detail="CEP must have 8 digits")

    try:
        resp = await client.get(f"{config.VIACEP_API_URL}/{clean_cep}/json/", timeout=CEP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"CEP lookup failed for {clean_cep}: {e}")
        raise HTTPException(
            status_code=502, detail="Could not look up the CEP. Check that it is correct."
        ) from e

    if data.get("erro"):
        raise HTTPException(status_code=404, detail="CEP not found")

    return AddressLookup(
        cep=data.get("cep") or clean_cep,
        street=data.get("logradouro"),
        neighborhood=data.get("bairro"),
        city=data.get("localidade"),
        state=data.get("uf"),
    )


@router.get("/states", response_model=list[StateItem])
async def get_states(client: httpx.AsyncClient = Depends(get_http_client)):
    """Brazilian states ordered by name"""
    try:
        resp = await client.get(
            f"{config.IBGE_API_URL}/localidades/estados",
            params={"orderBy": "nome"},
            timeout=DIRECTORY_TIMEOUT,
        )
        resp.raise_for_status()
        return [StateItem(id=s["id"], sigla=s["sigla"], nome=s["nome"]) for s in resp.json()]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.error(f"State directory lookup failed: {e}")
        raise HTTPException(status_code=502, detail="Could not load states") from e


@router.get("/cities/{state_id}", response_model=list[CityItem])
async def get_cities(state_id: str, client: httpx.AsyncClient = Depends(get_http_client)):
    """Municipalities of a state (IBGE id or UF code) ordered by name"""
    try:
        resp = await client.get(
            f"{config.IBGE_API_URL}/localidades/estados/{state_id}/municipios",
            params={"orderBy": "nome"},
            timeout=DIRECTORY_TIMEOUT,
        )
        resp.raise_for_status()
        return [CityItem(id=c["id"], nome=c["nome"]) for c in resp.json()]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.error(f"City directory lookup failed for state {state_id}: {e}")
        raise HTTPException(status_code=502, detail="Could not load cities") from e


@router.post("/whatsapp/generate-link", response_model=WhatsappLinkResponse)
async def generate_whatsapp_link(
    data: WhatsappRequest,
    current_user: User = Depends(get_current_user),
):
    return WhatsappLinkResponse(link=build_whatsapp_link(data.phone, data.message))


@router.post("/whatsapp/send", response_model=WhatsappSendResponse)
async def send_whatsapp_message(
    data: WhatsappRequest,
    current_user: User = Depends(get_current_user),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Send through the provider, falling back to a click-to-chat link"""
    link = build_whatsapp_link(data.phone, data.message)

    if not config.WHATSAPP_API_URL or not config.WHATSAPP_API_KEY:
        logger.warning("WhatsApp API not configured, returning link")
        return WhatsappSendResponse(sent=False, link=link)

    try:
        resp = await client.post(
            f"{config.WHATSAPP_API_URL}/messages",
            json={"to": digits_only(data.phone), "message": data.message},
            headers={"Authorization": f"Bearer {config.WHATSAPP_API_KEY}"},
            timeout=WHATSAPP_TIMEOUT,
        )
        resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"WhatsApp send failed for user_id {current_user.id}: {e}")
        return WhatsappSendResponse(sent=False, link=link)

    logger.info(f"WhatsApp message sent for user_id: {current_user.id}")
    try:
        provider_response = resp.json()
    except ValueError:
        provider_response = None
    return WhatsappSendResponse(sent=True, providerResponse=provider_response)
