from pydantic import BaseModel


class Coordinate(BaseModel):
    """A point in degrees. Ranges are not enforced; bad input yields odd distances."""

    lat: float
    lng: float
    name: str | None = None
