# services/catalog.py - Fixed grooming service catalog
from typing import Dict, Optional

SERVICE_CATALOG: Dict[str, Dict] = {
    "mandi-biasa": {"name": "Mandi Biasa", "price": 50000},
    "mandi-kutu": {"name": "Mandi Anti Kutu", "price": 75000},
    "mandi-grooming": {"name": "Mandi + Grooming Lengkap", "price": 99000},
}


def get_service(code: str) -> Optional[Dict]:
    return SERVICE_CATALOG.get(code)


def list_services():
    return [
        {"code": code, "name": item["name"], "price": item["price"]}
        for code, item in SERVICE_CATALOG.items()
    ]


def format_rupiah(amount: int) -> str:
    """50000 -> 'Rp 50.000'"""
    return "Rp " + f"{amount:,}".replace(",", ".")
