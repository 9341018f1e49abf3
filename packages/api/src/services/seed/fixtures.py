# This project was developed with assistance from AI tools.
"""
Service-type catalog fixtures.

Each service the agency offers carries its own list of named document
requirements. "Other" is offered on every service but never required.
"""

import hashlib
import json

OPTIONAL_DOCUMENTS = frozenset({"Other"})

SERVICE_TYPES: list[dict] = [
    {
        "key": "business_registration",
        "name": "Business Registration",
        "description": "Company formation and business residency.",
        "documents": [
            "Passport Copy",
            "Business Plan",
            "Company Documents",
            "Bank Statement",
            "Application Form",
            "Other",
        ],
    },
    {
        "key": "work_visa",
        "name": "Work Visa",
        "description": "Employment-sponsored residence and work permit.",
        "documents": [
            "Passport Copy",
            "Employment Contract",
            "Education Certificates",
            "Photo",
            "Health Certificate",
            "Criminal Record",
            "Other",
        ],
    },
    {
        "key": "family_visa",
        "name": "Family Visa",
        "description": "Family reunification and dependant visas.",
        "documents": [
            "Passport Copy",
            "Marriage Certificate",
            "Birth Certificate",
            "Photo",
            "Sponsor Documents",
            "Other",
        ],
    },
    {
        "key": "business_visa",
        "name": "Business Visa",
        "description": "Short-stay business travel.",
        "documents": [
            "Passport Copy",
            "Invitation Letter",
            "Business License",
            "Photo",
            "Bank Statement",
            "Other",
        ],
    },
    {
        "key": "tourist_visa",
        "name": "Tourist Visa",
        "description": "Short-stay leisure travel.",
        "documents": [
            "Passport Copy",
            "Photo",
            "Travel Itinerary",
            "Hotel Booking",
            "Bank Statement",
            "Other",
        ],
    },
]


def compute_config_hash() -> str:
    """SHA-256 of the fixture content, reported with each seed run."""
    content = json.dumps(
        {s["key"]: s["documents"] for s in SERVICE_TYPES},
        sort_keys=True,
    )
    return hashlib.sha256(content.encode()).hexdigest()
