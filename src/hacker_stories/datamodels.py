from __future__ import annotations
from dataclasses import dataclass


# --- Data models ---
@dataclass(frozen=True)
class Story:
    object_id: str
    title: str
    url: str
    author: str
    num_comments: int = 0
    points: int = 0
