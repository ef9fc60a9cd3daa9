# routes/promos.py - Promotional offers
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from config import get_db
from models.promos import PromoRequest, PromoUpdateRequest, PromoResponse
from repository.admin import get_current_admin
from repository.promos import PromoRepo
from services.exceptions import NotFoundError, ValidationError
from tables.admin_sessions import AdminSession
from tables.promos import Promo
from utils.clock import utcnow

router = APIRouter(prefix="/promos", tags=["Promos"])


def to_promo_response(promo: Promo) -> PromoResponse:
    return PromoResponse(
        id=promo.id,
        title=promo.title,
        description=promo.description or "",
        start_date=promo.start_date,
        end_date=promo.end_date,
        is_active=promo.is_active,
        original_price=promo.original_price,
        discounted_price=promo.discounted_price,
        discount_percentage=promo.discount_percentage,
        created_at=promo.created_at,
        updated_at=promo.updated_at
    )


@router.get("/active")
def list_active_promos(db: Session = Depends(get_db)):
    """Promos running today"""
    promos = PromoRepo.find_active(db, utcnow().date())
    return {"success": True, "promos": [to_promo_response(p) for p in promos]}


@router.get("")
def list_promos(db: Session = Depends(get_db), admin: AdminSession = Depends(get_current_admin)):
    return {"success": True, "promos": [to_promo_response(p) for p in PromoRepo.get_all(db)]}


@router.post("")
def create_promo(
    req: PromoRequest,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    promo = PromoRepo.create(db, Promo(**req.dict()))
    return {"success": True, "promo": to_promo_response(promo), "message": "Promo created"}


@router.put("/{promo_id}")
def update_promo(
    promo_id: str,
    req: PromoUpdateRequest,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    existing = PromoRepo.find_by_id(db, promo_id)
    if not existing:
        raise NotFoundError("Promo", promo_id)

    updates = req.dict(exclude_unset=True)
    start_date = updates.get("start_date", existing.start_date)
    end_date = updates.get("end_date", existing.end_date)
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date", field="end_date")

    promo = PromoRepo.update(db, promo_id, updates)
    return {"success": True, "promo": to_promo_response(promo), "message": "Promo updated"}


@router.delete("/{promo_id}")
def delete_promo(
    promo_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(get_current_admin)
):
    if not PromoRepo.delete(db, promo_id):
        raise NotFoundError("Promo", promo_id)
    return {"success": True, "message": "Promo deleted"}
