from __future__ import annotations

from typing import Annotated

from fastapi import Path


# Digits only: "3.0", "1e2" and "article_3" fail validation and become 400s
ID_PATTERN = r"^-?\d+$"


def article_id_param(article_id: Annotated[str, Path(pattern=ID_PATTERN)]) -> int:
    return int(article_id)


def comment_id_param(comment_id: Annotated[str, Path(pattern=ID_PATTERN)]) -> int:
    return int(comment_id)
