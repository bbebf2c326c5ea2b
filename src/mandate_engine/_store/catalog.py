# Area: Store
"""
mandate_engine._store.catalog — Decision Card Catalog
=====================================================

Pydantic models for the decision-card catalog. Effect mappings are
validated against the known effect keys when the catalog is loaded,
so resolution only ever sees typed (EffectKey, delta) pairs.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError, field_validator

from .._engine.enums import EffectKey
from .._engine.indicators import Effect
from ..errors import InvalidInputError

logger = logging.getLogger("mandate_engine.store.catalog")

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "cards.json"

EFFECT_KEYS = {key.value for key in EffectKey}


class OptionModel(BaseModel):
    """One selectable option of a card."""

    model_config = ConfigDict(extra="forbid")

    text: str = Field(min_length=1)
    stance: Optional[Literal["ethical", "corrupt"]] = None
    effects: Dict[str, StrictInt] = Field(default_factory=dict)

    @field_validator("effects")
    @classmethod
    def _known_effect_keys(cls, value: Dict[str, int]) -> Dict[str, int]:
        unknown = [key for key in value if key not in EFFECT_KEYS]
        if unknown:
            raise ValueError(f"unknown effect keys: {', '.join(unknown)}")
        return value


class CardModel(BaseModel):
    """A catalog decision card as authored in JSON."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    dilemma: str = Field(min_length=1)
    assigned_role: Optional[str] = None
    options: List[OptionModel] = Field(min_length=2)


@dataclass(frozen=True)
class CardOption:
    text: str
    stance: Optional[str]
    effects: Tuple[Effect, ...]


@dataclass(frozen=True)
class DecisionCard:
    """A stored catalog card with typed options."""

    id: int
    title: str
    dilemma: str
    assigned_role: Optional[str]
    options: Tuple[CardOption, ...]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DecisionCard":
        return cls(
            id=row["decision_card_id"] if "decision_card_id" in row else row["id"],
            title=row["title"],
            dilemma=row["dilemma"],
            assigned_role=row["assigned_role"],
            options=decode_options(row["options"]),
        )


_CATALOG_ADAPTER = TypeAdapter(List[CardModel])


def validate_cards(data: Any) -> List[CardModel]:
    """
    Validate raw catalog data.

    Raises:
        InvalidInputError: Listing every invalid field
    """
    try:
        return _CATALOG_ADAPTER.validate_python(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidInputError("Invalid decision card catalog", validation_errors=errors) from e


def load_catalog(path: Union[str, Path, None] = None) -> List[CardModel]:
    """
    Load and validate a catalog JSON file.

    Args:
        path: Catalog path, defaults to the bundled catalog

    Returns:
        Validated card models
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    with open(catalog_path, encoding="utf-8") as f:
        data = json.load(f)
    cards = validate_cards(data)
    logger.info(f"Loaded {len(cards)} decision cards from {catalog_path}")
    return cards


def encode_options(options: List[OptionModel]) -> str:
    """Serialize options, keeping effects as ordered [key, delta] pairs."""
    return json.dumps(
        [
            {
                "text": option.text,
                "stance": option.stance,
                "effects": [[key, delta] for key, delta in option.effects.items()],
            }
            for option in options
        ],
        ensure_ascii=False,
    )


def decode_options(raw: str) -> Tuple[CardOption, ...]:
    return tuple(
        CardOption(
            text=item["text"],
            stance=item.get("stance"),
            effects=tuple((EffectKey(key), int(delta)) for key, delta in item["effects"]),
        )
        for item in json.loads(raw)
    )
