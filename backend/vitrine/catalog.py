"""
Default pricing catalog written by POST /api/packages/seed.

Three tiers, in display order. Call-to-action links open a WhatsApp chat
with a prefilled message naming the tier.
"""

from typing import Dict, List
from urllib.parse import quote

from vitrine.config import settings

DEFAULT_PACKAGES: List[Dict] = [
    {
        "name": "Basic Package",
        "price": "25,000",
        "features": [
            "One-page website design",
            "Responsive design",
            "Simple admin dashboard",
            "One month of technical support",
        ],
    },
    {
        "name": "Business Package",
        "price": "45,000",
        "features": [
            "Multi-page website design",
            "Search engine optimization (SEO)",
            "Social media integration",
            "Three months of technical support",
        ],
    },
    {
        "name": "Enterprise Package",
        "price": "Contact us",
        "features": [
            "Custom software solutions",
            "Full e-commerce store",
            "Mobile applications",
            "Yearly support and maintenance",
        ],
    },
]


def whatsapp_link(text: str, number: str = "") -> str:
    return f"https://wa.me/{number or settings.whatsapp_number}?text={quote(text)}"


def default_package_rows() -> List[Dict]:
    """Rows ready for Repository.insert_many, with links and positions filled in."""
    rows = []
    for position, package in enumerate(DEFAULT_PACKAGES):
        rows.append(
            {
                **package,
                "features": list(package["features"]),
                "cta_link": whatsapp_link(f"I am interested in the {package['name']}"),
                "position": position,
            }
        )
    return rows
