"""Immutable record types shared by every pipeline stage."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..normalize.normalizer import format_won


@dataclass(frozen=True)
class Account:
    """One company/customer record after normalisation."""

    domain: str
    company_name: str = ""
    employee_count: Optional[float] = None
    location: str = ""
    region: str = ""
    industry: str = ""
    logins_last_30d: Optional[float] = None
    contacts_in_account: Optional[float] = None
    feature_event_count: Optional[float] = None
    deal_stage: str = ""
    deal_won: Optional[bool] = None
    arr: Optional[float] = None
    signup_date: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Return the cleaned JSON row (``deal_won`` as ``"True"``/``"False"``/``""``)."""

        rec = asdict(self)
        rec["deal_won"] = format_won(self.deal_won)
        rec["signup_date"] = self.signup_date or ""
        return rec


@dataclass(frozen=True)
class EngagementEvent:
    """One outbound send and the engagement it produced.

    ``opened``/``clicked``/``replied`` are taken as-is; a row may be replied
    without being opened.  The ``account_*`` fields are copies made when the
    row was cleaned and are ``None`` for unmatched domains.
    """

    company_domain: str
    email: str = ""
    name: str = ""
    outbound_campaign_id: str = ""
    send_date: Optional[str] = None
    opened: bool = False
    clicked: bool = False
    replied: bool = False
    matched_account: bool = False
    account_company_name: Optional[str] = None
    account_region: Optional[str] = None
    account_industry: Optional[str] = None
    account_deal_stage: Optional[str] = None
    account_deal_won: Optional[bool] = None
    account_employee_count: Optional[float] = None
    account_arr: Optional[float] = None

    def to_record(self) -> Dict[str, Any]:
        rec = asdict(self)
        rec["send_date"] = self.send_date or ""
        rec["matched_account"] = "True" if self.matched_account else "False"
        if self.matched_account:
            rec["account_deal_won"] = format_won(self.account_deal_won)
        return rec
