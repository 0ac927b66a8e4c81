"""Static lookup tables used by the normaliser."""
from __future__ import annotations

from typing import Dict, Tuple

UNKNOWN_REGION = "Unknown"
OTHER_INDUSTRY = "Other / Unknown"

# alias (lowercase) -> (canonical country, region)
COUNTRY_REGIONS: Dict[str, Tuple[str, str]] = {
    "united states": ("United States", "North America"),
    "usa": ("United States", "North America"),
    "u.s.a.": ("United States", "North America"),
    "united states of america": ("United States", "North America"),
    "canada": ("Canada", "North America"),
    "mexico": ("Mexico", "North America"),
    "united kingdom": ("United Kingdom", "Europe"),
    "uk": ("United Kingdom", "Europe"),
    "england": ("United Kingdom", "Europe"),
    "britain": ("United Kingdom", "Europe"),
    "great britain": ("United Kingdom", "Europe"),
    "australia": ("Australia", "Oceania"),
    "chile": ("Chile", "South America"),
    "qatar": ("Qatar", "Middle East"),
    "south africa": ("South Africa", "Africa"),
    "czechia": ("Czechia", "Europe"),
    "czech republic": ("Czechia", "Europe"),
    "germany": ("Germany", "Europe"),
    "france": ("France", "Europe"),
    "spain": ("Spain", "Europe"),
    "italy": ("Italy", "Europe"),
    "netherlands": ("Netherlands", "Europe"),
    "belgium": ("Belgium", "Europe"),
    "sweden": ("Sweden", "Europe"),
    "norway": ("Norway", "Europe"),
    "finland": ("Finland", "Europe"),
    "denmark": ("Denmark", "Europe"),
    "brazil": ("Brazil", "South America"),
    "argentina": ("Argentina", "South America"),
    "colombia": ("Colombia", "South America"),
    "peru": ("Peru", "South America"),
    "nigeria": ("Nigeria", "Africa"),
    "kenya": ("Kenya", "Africa"),
    "egypt": ("Egypt", "Africa"),
    "india": ("India", "Asia"),
    "china": ("China", "Asia"),
    "japan": ("Japan", "Asia"),
    "singapore": ("Singapore", "Asia"),
    "indonesia": ("Indonesia", "Asia"),
    "thailand": ("Thailand", "Asia"),
    "vietnam": ("Vietnam", "Asia"),
    "philippines": ("Philippines", "Asia"),
}

# Evaluated top to bottom; the first bucket with a matching keyword wins.
INDUSTRY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Software & Technology",
        (
            "tech", "software", "cloud", "data", "platform", "automation",
            "ai", "ml", "analytics", "it ", " it", "labs", "digital", "cyber",
            "security", "devops", "robot", "drone", "quantum", "monitoring",
            "cpq", "xr", "telematics",
        ),
    ),
    (
        "Financial Services",
        (
            "bank", "lending", "finance", "financial", "capital", "equity",
            "investment", "venture", "crowdfunding", "payments", "insur",
            "credit", "fintech", "private equity",
        ),
    ),
    (
        "Manufacturing & Industrial",
        (
            "manufacturing", "industrial", "engineering", "fabrication",
            "plant", "factory", "hardware",
        ),
    ),
    (
        "Retail & Consumer",
        (
            "retail", "e-commerce", "commerce", "consumer", "fashion",
            "apparel", "marketplace", "restaurant", "food", "hospitality",
            "ticket", "gaming",
        ),
    ),
    (
        "Media & Entertainment",
        ("media", "entertain", "stream", "content", "gaming network"),
    ),
    (
        "Healthcare & Life Sciences",
        ("health", "medical", "pharma", "bio", "life science", "fitness"),
    ),
    (
        "Energy & Utilities",
        ("energy", "solar", "power", "utility", "oil", "gas"),
    ),
    (
        "Transportation & Mobility",
        ("transport", "fleet", "mobility", "logistic", "supply chain", "warehous"),
    ),
    (
        "Professional & Business Services",
        (
            "consult", "professional", "services", "agency", "studio",
            "partners", "group", "holdings", "solutions", "collective",
            "network",
        ),
    ),
    (
        "Public / Nonprofit / Education",
        (
            "government", "public", "ngo", "nonprofit", "education",
            "university", "research",
        ),
    ),
    (
        "Real Estate & Facilities",
        ("real estate", "property", "facilities", "facility", "construction"),
    ),
)

INDUSTRY_BUCKETS: Tuple[str, ...] = tuple(name for name, _ in INDUSTRY_RULES) + (OTHER_INDUSTRY,)
