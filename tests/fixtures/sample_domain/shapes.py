class Shape:
    label: str = ""
    size: int = 0


class Square(Shape):
    size: float = 0.0
