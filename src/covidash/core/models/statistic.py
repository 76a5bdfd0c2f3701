from pydantic import BaseModel


class TableStatistic(BaseModel):
    """Cumulative figure and daily change shown in one dashboard table cell."""

    total: float = 0
    delta: float = 0

    model_config = {"frozen": True}
