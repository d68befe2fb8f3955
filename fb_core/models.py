from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def generate_id() -> str:
    """Generate a unique record ID."""
    return str(uuid.uuid4())[:12]


@dataclass
class ClassificationResult:
    category: str
    confidence: str = "low"  # "high" | "low"
    matched_keyword: Optional[str] = None


@dataclass
class StorageSuggestion:
    storage: str
    reason: str


@dataclass
class Suggestion:
    category: str
    confidence: str
    storage: str
    reason: str
    matched_keyword: Optional[str] = None


# Persisted records keep the camelCase field names of the stored JSON blobs.
@dataclass
class FoodItem:
    id: str
    name: str
    category: str
    quantity: str
    expiry_date: str  # ISO date
    storage: str
    date_added: str
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "expiryDate": self.expiry_date,
            "storage": self.storage,
            "dateAdded": self.date_added,
        }
        if self.notes is not None:
            out["notes"] = self.notes
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FoodItem":
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            category=d.get("category", "Others"),
            quantity=d.get("quantity", ""),
            expiry_date=d.get("expiryDate", ""),
            storage=d.get("storage", "Pantry"),
            date_added=d.get("dateAdded", ""),
            notes=d.get("notes"),
        )


@dataclass
class ConsumedItem:
    id: str
    item_name: str
    consumed_date: str
    method: str = "manual"  # "manual" | "recipe"
    quantity: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "itemName": self.item_name,
            "consumedDate": self.consumed_date,
            "method": self.method,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ConsumedItem":
        return cls(
            id=str(d["id"]),
            item_name=d.get("itemName", ""),
            consumed_date=d.get("consumedDate", ""),
            method=d.get("method", "manual"),
            quantity=d.get("quantity", ""),
        )


@dataclass
class ShoppingListItem:
    id: str
    name: str
    category: str = "Others"
    quantity: str = ""
    is_completed: bool = False
    source: str = "manual"  # "auto" | "manual"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "isCompleted": self.is_completed,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ShoppingListItem":
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            category=d.get("category", "Others"),
            quantity=d.get("quantity", ""),
            is_completed=bool(d.get("isCompleted", False)),
            source=d.get("source", "manual"),
        )


@dataclass
class UserPreferences:
    weight: float
    height: float
    age: int
    gender: str = "male"
    activity_level: str = "sedentary"
    goal: str = "maintain"
    preferred_diet: str = "balanced"
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.extra)
        out.update(
            {
                "weight": self.weight,
                "height": self.height,
                "age": self.age,
                "gender": self.gender,
                "activityLevel": self.activity_level,
                "goal": self.goal,
                "preferredDiet": self.preferred_diet,
            }
        )
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "UserPreferences":
        known = {
            "weight",
            "height",
            "age",
            "gender",
            "activityLevel",
            "goal",
            "preferredDiet",
        }
        return cls(
            weight=float(d["weight"]),
            height=float(d["height"]),
            age=int(d["age"]),
            gender=d.get("gender", "male"),
            activity_level=d.get("activityLevel", "sedentary"),
            goal=d.get("goal", "maintain"),
            preferred_diet=d.get("preferredDiet", "balanced"),
            extra={k: v for k, v in d.items() if k not in known},
        )
