"""Demo catalogue generator with deterministic seeding.

Generates realistic aluminium-hardware product documents for local
development and for seeding an empty store. Uses seeded random for
reproducibility.
"""

import hashlib
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator

from catalogue.catalog.taxonomy import CATEGORY_NAMES


# ============================================================================
# Constants
# ============================================================================

SERIES = [
    "Glamour",
    "Vista",
    "Skyline",
    "Horizon",
    "Aurora",
    "Summit",
    "Meridian",
    "Crest",
]

ADJECTIVES = [
    "Premium",
    "Slimline",
    "Heavy-Duty",
    "Thermal-Break",
    "Classic",
    "Elite",
    "Modular",
    "Acoustic",
]

BADGES = ["New", "Bestseller", "Popular", None, None, None]

FINISHES = ["Anodized Silver", "Powder Coated Black", "Champagne Gold", "Matt White"]

# Product name templates and content by category
CATEGORY_CONTENT: dict[str, dict[str, list[str]]] = {
    "windows": {
        "templates": [
            "{series} {adj} Sliding Window",
            "{series} Casement Window {adj}",
            "{series} {adj} Tilt & Turn Window",
        ],
        "features": [
            "Multi-point locking",
            "Double glazing ready",
            "Weather-sealed tracks",
            "Insect mesh option",
            "Low maintenance finish",
        ],
        "applications": ["Residential", "Apartments", "Offices", "Hotels"],
    },
    "doors": {
        "templates": [
            "{series} {adj} Sliding Door",
            "{series} Folding Door {adj}",
            "{series} {adj} Swing Door Frame",
        ],
        "features": [
            "Concealed hinges",
            "Soft-close rollers",
            "Flush threshold",
            "Stainless steel hardware",
            "Large glass panels",
        ],
        "applications": ["Patios", "Balconies", "Shopfronts", "Residential"],
    },
    "railings": {
        "templates": [
            "{series} {adj} Glass Railing",
            "{series} Balustrade {adj}",
            "{series} {adj} Stair Railing",
        ],
        "features": [
            "Toughened glass infill",
            "Corrosion resistant",
            "Tool-free glass clamps",
            "Concealed fixings",
        ],
        "applications": ["Staircases", "Balconies", "Terraces", "Walkways"],
    },
    "curtain-walls": {
        "templates": [
            "{series} {adj} Curtain Wall System",
            "{series} Unitized Facade {adj}",
        ],
        "features": [
            "Structural glazing",
            "High wind load rating",
            "Thermal break profiles",
            "Pressure-equalized drainage",
        ],
        "applications": ["Commercial towers", "Showrooms", "Airports", "Hospitals"],
    },
    "roofing": {
        "templates": [
            "{series} {adj} Skylight Roof",
            "{series} Polycarbonate Roofing {adj}",
            "{series} {adj} Pergola Roof",
        ],
        "features": [
            "UV protected sheets",
            "Integrated gutters",
            "Lightweight frame",
            "Leak-proof joints",
        ],
        "applications": ["Courtyards", "Car parks", "Atriums", "Walkways"],
    },
}

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for demo catalogue generation.

    Attributes:
        seed: Random seed for reproducibility.
        products_per_category: Number of products per category.
        categories: Category ids to generate products for.
    """

    seed: int = 42
    products_per_category: int = 3
    categories: tuple[str, ...] = tuple(CATEGORY_NAMES)

    @classmethod
    def small(cls) -> "GeneratorConfig":
        """Create config for a small catalogue (~15 products)."""
        return cls(seed=42, products_per_category=3)

    @classmethod
    def full(cls) -> "GeneratorConfig":
        """Create config for a full catalogue (~50 products)."""
        return cls(seed=42, products_per_category=10)


# ============================================================================
# Product Generator
# ============================================================================


class ProductGenerator:
    """Generates demo product documents with deterministic seeding.

    Documents use the store's field names and contain everything except
    the id, which the store assigns on creation.

    Example usage:
        generator = ProductGenerator(GeneratorConfig.small())
        for document in generator.generate():
            print(document["name"])
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config

    def _deterministic_seed(self, *args: str | int) -> int:
        """Create deterministic seed from arguments."""
        data = "|".join(str(a) for a in args)
        hash_bytes = hashlib.md5(data.encode()).digest()
        return int.from_bytes(hash_bytes[:4], "big")

    def _generate_model(self, category_id: str, index: int, series: str) -> str:
        """Generate a model code, e.g. "GLA-WIN-001"."""
        prefix = "".join(c for c in category_id if c.isalpha())[:3].upper()
        return f"{series[:3].upper()}-{prefix}-{index + 1:03d}"

    def _generate_image_url(self, model: str) -> str:
        """Generate placeholder image URL."""
        seed = self._deterministic_seed(self.config.seed, model)
        return f"https://picsum.photos/seed/{seed}/400/300"

    def _generate_document(self, category_id: str, index: int, position: int) -> dict[str, Any]:
        """Generate a single product document.

        Args:
            category_id: Product category.
            index: Product index within category.
            position: Overall position, used to spread creation times.

        Returns:
            Product document.
        """
        rng = random.Random(self._deterministic_seed(self.config.seed, category_id, index))
        content = CATEGORY_CONTENT.get(category_id, CATEGORY_CONTENT["windows"])

        series = rng.choice(SERIES)
        adj = rng.choice(ADJECTIVES)
        name = rng.choice(content["templates"]).format(series=series, adj=adj)
        model = self._generate_model(category_id, index, series)
        finish = rng.choice(FINISHES)

        created_at = BASE_TIME + timedelta(hours=position)

        return {
            "name": name,
            "description": (
                f"{adj} {CATEGORY_NAMES.get(category_id, category_id).lower()} from the "
                f"{series} series, finished in {finish.lower()}."
            ),
            "model": model,
            "category": category_id,
            "image": self._generate_image_url(model),
            "badge": rng.choice(BADGES) or "",
            "rating": round(rng.uniform(3.5, 5.0), 1),
            "reviews": rng.randint(0, 250),
            "features": rng.sample(content["features"], k=min(3, len(content["features"]))),
            "applications": rng.sample(content["applications"], k=2),
            "specifications": {
                "Material": "Aluminium alloy 6063-T5",
                "Finish": finish,
                "Profile thickness": f"{rng.choice([1.2, 1.4, 1.6, 2.0])} mm",
                "Warranty": f"{rng.choice([5, 10, 15])} years",
            },
            "createdAt": created_at,
            "updatedAt": created_at,
        }

    def generate(self) -> Iterator[dict[str, Any]]:
        """Generate all product documents.

        Yields:
            Product documents, category by category.
        """
        position = 0
        for category_id in self.config.categories:
            for index in range(self.config.products_per_category):
                yield self._generate_document(category_id, index, position)
                position += 1

    def generate_list(self) -> list[dict[str, Any]]:
        """Generate all product documents as a list."""
        return list(self.generate())
