class Inventory:
    owner: str = ""
    # No element type, so the builder cannot type its collection methods.
    items: list = []
