"""
Index helpers keeping selections inside their collections
"""


def clamp_index(index: int, length: int) -> int:
    """Clamp to [0, length); 0 for an empty collection"""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def move_index(index: int, delta: int, length: int) -> int:
    """Move by ``delta`` and clamp"""
    return clamp_index(index + delta, length)


def clamp_scroll(selected: int, offset: int, visible: int) -> int:
    """
    Smallest adjustment of ``offset`` so that
    ``offset <= selected < offset + visible``.
    """
    visible = max(1, visible)
    if selected < offset:
        return selected
    if selected >= offset + visible:
        return selected - visible + 1
    return max(0, offset)
