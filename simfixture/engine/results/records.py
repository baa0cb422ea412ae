import msgspec


class RunHeader(msgspec.Struct, kw_only=True, tag="run"):
    run_id: str
    simulation: str
    description: str
    started_at: float
    vus: int
    duration_seconds: float
    iterations: int | None = None


class RequestRecord(msgspec.Struct, kw_only=True, tag="request"):
    step: str
    vu: int
    start: float
    end: float
    ok: bool
    error: str | None = None

    @property
    def elapsed_ms(self) -> float:
        return (self.end - self.start) * 1000


class RunCompleted(msgspec.Struct, kw_only=True, tag="completed"):
    run_id: str
    finished_at: float
    requests: int


Record = RunHeader | RequestRecord | RunCompleted
