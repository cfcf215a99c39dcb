# themepark/visitors/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Person:
    name: Optional[str]
    age: Optional[int]
    contact_number: Optional[str] = ""

    def describe(self) -> str:
        return f"Person [Name: {self.name}, Age: {self.age}, Contact: {self.contact_number}]"


@dataclass(frozen=True)
class Visitor(Person):
    """
    A park guest holding a ticket for one visit day.
    ticket_id is the key a ride uses to tell history entries apart;
    visit_date is kept as its YYYY-MM-DD text so it sorts chronologically.
    """
    ticket_id: Optional[str] = None
    visit_date: Optional[str] = None

    def describe(self) -> str:
        return (f"{super().describe()} | "
                f"Visitor [Ticket ID: {self.ticket_id}, Visit Date: {self.visit_date}]")


@dataclass(frozen=True)
class Employee(Person):
    """Ride operator. Only name and ride_specialization show up in cycle reports."""
    employee_id: Optional[str] = None
    ride_specialization: Optional[str] = None
