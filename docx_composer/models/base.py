"""
Base model class for WordprocessingML document models.
"""

from abc import ABC
from typing import Any, Dict, Iterator, List, Optional, Type
import uuid
import logging

logger = logging.getLogger(__name__)


class Models(ABC):
    """Abstract base class for document models with tree helpers."""

    def __init__(self):
        """Initialize base model."""
        self.parent: Optional['Models'] = None
        self.children: List['Models'] = []
        self.id: str = str(uuid.uuid4())

    def add_child(self, model: 'Models'):
        """Add child model to this model."""
        if model not in self.children:
            self.children.append(model)
            model.parent = self

    def remove_child(self, model: 'Models') -> bool:
        """Detach child model; returns False when it was not attached."""
        if model in self.children:
            self.children.remove(model)
            model.parent = None
            return True
        return False

    def iter_children(self, type_filter: Optional[Type['Models']] = None) -> Iterator['Models']:
        """Iterate over children, optionally filtered by type."""
        for child in self.children:
            if type_filter is None or isinstance(child, type_filter):
                yield child

    def get_text(self) -> str:
        """Get text content from model."""
        return "".join(child.get_text() for child in self.children)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            'type': self.__class__.__name__,
            'id': self.id,
            'children': [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        """String representation of model."""
        return f"{self.__class__.__name__}(id={self.id[:8]}..., children={len(self.children)})"
