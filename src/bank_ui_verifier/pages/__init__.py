"""
Pages module - page accessors for the driven application.

Accessors are independent of each other and share collaborators through a
``BankSession`` rather than a common base class.
"""

from bank_ui_verifier.pages.interactions import Interactions
from bank_ui_verifier.pages.login import LoginPage
from bank_ui_verifier.pages.dashboard import DashboardPage
from bank_ui_verifier.pages.transfer import TransferPage
from bank_ui_verifier.pages.session import BankSession

__all__ = [
    "Interactions",
    "LoginPage",
    "DashboardPage",
    "TransferPage",
    "BankSession",
]
