from pydantic import BaseModel

from burndown_estimator import config


class BurndownParameters(BaseModel):
    sampling: int
    granularity: int
    tick_size: float = config.DEFAULT_TICK_SIZE


class BurndownHeader(BaseModel):
    """Sparse burndown header: (start, last, sampling, granularity, tick_size).

    ``start`` and ``last`` are unix timestamps. Positivity of the parameters is
    checked by the pipeline, which reports violations as processing errors.
    """

    start: int
    last: int
    sampling: int
    granularity: int
    tick_size: float = config.DEFAULT_TICK_SIZE

    @property
    def parameters(self) -> BurndownParameters:
        return BurndownParameters(
            sampling=self.sampling,
            granularity=self.granularity,
            tick_size=self.tick_size,
        )


class BurndownInput(BaseModel):
    """Already-decoded burndown document consumed by the CLI."""

    name: str = "project"
    header: BurndownHeader
    matrix: list[list[int]] | None = None
    files: dict[str, list[list[int]]] = {}
