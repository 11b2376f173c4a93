"""
客户端固定分类表（服务端不持久化、不校验）
"""

CATEGORIES: dict[str, str] = {
    "Work": "1",
    "Personal": "2",
    "Other": "3",
}

_LABELS = {category_id: label for label, category_id in CATEGORIES.items()}


def category_label(category_id: str | None) -> str:
    """分类 id → 展示名，未知或为空返回空串"""
    if not category_id:
        return ""
    return _LABELS.get(category_id, "")


def parse_category(value: str) -> str | None:
    """接受分类名（大小写不敏感）或分类 id，无法识别返回 None"""
    value = value.strip()
    if value in _LABELS:
        return value
    for label, category_id in CATEGORIES.items():
        if label.lower() == value.lower():
            return category_id
    return None
