"""Registration of the JSON API routes."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import APIRouter, Depends, Header, Request
from pydantic import BaseModel

from ..config import Settings
from ..core.auth import AccessGate
from ..data.bets import BetService
from ..data.names import NameService
from ..data.offers import OfferService
from ..data.wishlist import WishlistService
from ..errors import Unauthorized
from .middleware import client_ip


@dataclass(frozen=True)
class Services:
    names: NameService
    wishlist: WishlistService
    bets: BetService
    offers: OfferService


# ----------------------------------------------------------------------
# Request bodies. Every field is optional here so the services can answer
# missing values with their own messages.
class NameIn(BaseModel):
    name: str | None = None


class VoteIn(BaseModel):
    id: str | None = None
    type: str | None = None


class WishlistIn(BaseModel):
    name: str | None = None
    link: str | None = None
    price: str | None = None
    note: str | None = None


class ReserveIn(BaseModel):
    id: str | None = None
    reservedBy: str | None = None


class BetIn(BaseModel):
    name: str | None = None
    date: str | None = None
    time: str | None = None
    weight: int | float | str | None = None
    size: int | float | str | None = None


class OfferIn(BaseModel):
    name: str | None = None
    email: str | None = None
    description: str | None = None
    imageBase64: str | None = None


def register_routes(
    router: APIRouter, services: Services, gate: AccessGate, settings: Settings
) -> None:
    """Register all API routes on ``router``."""

    def pin_header(x_admin_pin: str | None = Header(None, alias=AccessGate.header)) -> str | None:
        return x_admin_pin

    def require_admin(pin: str | None = Depends(pin_header)) -> None:
        if not gate.authorize(pin):
            raise Unauthorized()

    admin = [Depends(require_admin)]
    success = {"success": True}

    @router.get("/config")
    def get_config() -> dict:
        return {"appTitle": settings.app_title, "dueDate": settings.due_date}

    @router.get("/verify-pin", dependencies=admin)
    def verify_pin() -> dict:
        return success

    # ------------------------------------------------------------------
    # Names
    @router.get("/names")
    def list_names() -> list[dict]:
        return [services.names.public_view(n) for n in services.names.list()]

    @router.post("/names", status_code=201)
    def create_name(body: NameIn) -> dict:
        return services.names.public_view(services.names.create(body.name))

    @router.delete("/names/{record_id}", dependencies=admin)
    def delete_name(record_id: str) -> dict:
        services.names.delete(record_id)
        return success

    @router.post("/vote")
    def vote(body: VoteIn, request: Request) -> dict:
        voter = client_ip(request, settings.trust_proxy)
        record = services.names.vote(body.id, voter, body.type)
        return services.names.public_view(record)

    # ------------------------------------------------------------------
    # Wishlist
    @router.get("/wishlist")
    def list_wishlist() -> list[dict]:
        return [item.to_dict() for item in services.wishlist.list()]

    @router.post("/wishlist", status_code=201, dependencies=admin)
    def create_wishlist_item(body: WishlistIn) -> dict:
        item = services.wishlist.create(body.name, body.link, body.price, body.note)
        return item.to_dict()

    @router.post("/wishlist/reserve")
    def reserve_wishlist_item(body: ReserveIn) -> dict:
        return services.wishlist.toggle_reservation(body.id, body.reservedBy).to_dict()

    @router.delete("/wishlist/{record_id}", dependencies=admin)
    def delete_wishlist_item(record_id: str) -> dict:
        services.wishlist.delete(record_id)
        return success

    # ------------------------------------------------------------------
    # Bets
    @router.get("/bets")
    def list_bets() -> list[dict]:
        return [bet.to_dict() for bet in services.bets.list()]

    @router.post("/bets", status_code=201)
    def create_bet(body: BetIn) -> dict:
        bet = services.bets.create(
            body.name, body.date, body.weight, body.size, time=body.time
        )
        return bet.to_dict()

    @router.delete("/bets/{record_id}", dependencies=admin)
    def delete_bet(record_id: str) -> dict:
        services.bets.delete(record_id)
        return success

    # ------------------------------------------------------------------
    # Offers
    @router.get("/offers")
    def list_offers(pin: str | None = Depends(pin_header)) -> list[dict]:
        # Emails are only for the admin, keep them away from scrapers
        view = services.offers.admin_view if gate.authorize(pin) else services.offers.public_view
        return [view(offer) for offer in services.offers.list()]

    @router.post("/offers", status_code=201)
    def create_offer(body: OfferIn) -> dict:
        offer = services.offers.create(
            body.name, body.description, body.imageBase64, email=body.email
        )
        return services.offers.public_view(offer)

    @router.delete("/offers/{record_id}", dependencies=admin)
    def delete_offer(record_id: str) -> dict:
        services.offers.delete(record_id)
        return success
