import msgspec


class Timings(msgspec.Struct, frozen=True, kw_only=True):
    vus: int
    duration_seconds: float
    iterations: int | None = None
    ramp_up_seconds: float = 0.0

    def start_delay(self, vu: int) -> float:
        if self.vus <= 1 or self.ramp_up_seconds <= 0:
            return 0.0

        return self.ramp_up_seconds * vu / self.vus
