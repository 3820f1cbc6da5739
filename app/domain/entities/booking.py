from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.slot import Slot


@dataclass(frozen=True)
class BookingRequest:
    customer_name: str
    service: str
    slot: Slot
    sender_id: str

    @property
    def summary(self) -> str:
        return f"{self.service} - {self.customer_name}"

    @property
    def description(self) -> str:
        return (
            f"Klijent: {self.customer_name}\n"
            f"Usluga: {self.service}\n"
            f"Telefon: {self.sender_id}\n"
            "Zakazano putem WhatsApp-a"
        )
