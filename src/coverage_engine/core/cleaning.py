"""Cleaning of raw account and outbound rows.

Raw rows are the string dictionaries produced by the CSV reader.  Account
rows are normalised field by field; outbound rows are normalised and enriched
with copies of the matched account's fields.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Mapping, Sequence

from loguru import logger

from ..index.domain_index import accounts_by_domain
from ..normalize import normalizer as norm
from ..normalize.tables import INDUSTRY_BUCKETS
from .models import Account, EngagementEvent


def _field(row: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = row.get(name)
        if value not in (None, ""):
            return value
    return None


def clean_account_row(row: Mapping[str, Any]) -> Account:
    location, region = norm.normalize_country(row.get("location"))
    stage, won = norm.normalize_deal_stage(row.get("deal_stage"))
    signup = (row.get("signup_date") or "").strip() or None
    return Account(
        domain=norm.normalize_domain(row.get("domain")),
        company_name=norm.clean_name(row.get("company_name")),
        employee_count=norm.to_number(row.get("employee_count")),
        location=location,
        region=region,
        industry=norm.bucket_industry(row.get("industry")),
        logins_last_30d=norm.to_number(row.get("logins_last_30d")),
        contacts_in_account=norm.to_number(
            _field(row, "contacts in account", "contacts_in_account")
        ),
        feature_event_count=norm.to_number(row.get("feature_event_count")),
        deal_stage=stage,
        deal_won=won,
        arr=norm.to_number(row.get("arr")),
        signup_date=signup,
    )


def clean_accounts(rows: Sequence[Mapping[str, Any]]) -> List[Account]:
    accounts = [clean_account_row(r) for r in rows]
    logger.info(f"Cleaned {len(accounts)} account rows")
    return accounts


def clean_outbound_row(row: Mapping[str, Any], lookup: Mapping[str, Account]) -> EngagementEvent:
    domain = norm.normalize_domain(row.get("company_domain"))
    acct = lookup.get(domain) if domain else None
    send_date = (row.get("send_date") or "").strip() or None
    return EngagementEvent(
        company_domain=domain,
        email=str(row.get("email") or "").strip().lower(),
        name=norm.clean_name(row.get("name")),
        outbound_campaign_id=str(row.get("outbound_campaign_id") or "").strip(),
        send_date=send_date,
        opened=norm.parse_bool(row.get("opened")),
        clicked=norm.parse_bool(row.get("clicked")),
        replied=norm.parse_bool(row.get("replied")),
        matched_account=acct is not None,
        account_company_name=acct.company_name if acct else None,
        account_region=acct.region if acct else None,
        account_industry=acct.industry if acct else None,
        account_deal_stage=acct.deal_stage if acct else None,
        account_deal_won=acct.deal_won if acct else None,
        account_employee_count=acct.employee_count if acct else None,
        account_arr=acct.arr if acct else None,
    )


def clean_outbound(
    rows: Sequence[Mapping[str, Any]], accounts: Sequence[Account]
) -> List[EngagementEvent]:
    lookup = accounts_by_domain(accounts)
    events = [clean_outbound_row(r, lookup) for r in rows]
    matched = sum(1 for ev in events if ev.matched_account)
    logger.info(f"Cleaned {len(events)} outbound rows, {matched} matched to an account")
    return events


# ---------------------------------------------------------------------------
# Record round-trip for cleaned JSON snapshots


def account_from_record(rec: Mapping[str, Any]) -> Account:
    """Rebuild an :class:`Account` from a cleaned JSON row.

    Cleaned rows are not re-normalised; bucketing an already bucketed industry
    label is not idempotent (``"Retail & Consumer"`` contains ``"ai"``).
    """

    return Account(
        domain=norm.normalize_domain(rec.get("domain")),
        company_name=str(rec.get("company_name") or ""),
        employee_count=norm.to_number(rec.get("employee_count")),
        location=str(rec.get("location") or ""),
        region=str(rec.get("region") or ""),
        industry=str(rec.get("industry") or ""),
        logins_last_30d=norm.to_number(rec.get("logins_last_30d")),
        contacts_in_account=norm.to_number(
            _field(rec, "contacts_in_account", "contacts in account")
        ),
        feature_event_count=norm.to_number(rec.get("feature_event_count")),
        deal_stage=str(rec.get("deal_stage") or ""),
        deal_won=norm.parse_won(rec.get("deal_won")),
        arr=norm.to_number(rec.get("arr")),
        signup_date=(str(rec.get("signup_date") or "").strip() or None),
    )


def event_from_record(rec: Mapping[str, Any]) -> EngagementEvent:
    return EngagementEvent(
        company_domain=norm.normalize_domain(rec.get("company_domain")),
        email=str(rec.get("email") or ""),
        name=str(rec.get("name") or ""),
        outbound_campaign_id=str(rec.get("outbound_campaign_id") or ""),
        send_date=(str(rec.get("send_date") or "").strip() or None),
        opened=norm.parse_bool(rec.get("opened")),
        clicked=norm.parse_bool(rec.get("clicked")),
        replied=norm.parse_bool(rec.get("replied")),
        matched_account=norm.parse_bool(rec.get("matched_account")),
        account_company_name=rec.get("account_company_name"),
        account_region=rec.get("account_region"),
        account_industry=rec.get("account_industry"),
        account_deal_stage=rec.get("account_deal_stage"),
        account_deal_won=norm.parse_won(rec.get("account_deal_won")),
        account_employee_count=norm.to_number(rec.get("account_employee_count")),
        account_arr=norm.to_number(rec.get("account_arr")),
    )


# ---------------------------------------------------------------------------
# Summaries


def account_summary(
    raw_rows: Sequence[Mapping[str, Any]], cleaned: Sequence[Account]
) -> Dict[str, Any]:
    raw_industries = {(str(r.get("industry") or "").strip() or "<blank>") for r in raw_rows}
    counts = Counter(acc.industry for acc in cleaned)
    return {
        "total_rows": len(cleaned),
        "distinct_raw_industries": len(raw_industries),
        "industry_buckets": {b: counts[b] for b in INDUSTRY_BUCKETS if counts[b]},
        "buckets_defined": list(INDUSTRY_BUCKETS),
    }


def outbound_summary(cleaned: Sequence[EngagementEvent]) -> Dict[str, Any]:
    total = len(cleaned)
    matched = sum(1 for ev in cleaned if ev.matched_account)
    return {
        "total_rows": total,
        "matched_rows": matched,
        "match_rate": round(matched / total * 100, 2) if total else 0,
        "unique_domains": len({ev.company_domain for ev in cleaned}),
        "matched_unique_domains": len(
            {ev.company_domain for ev in cleaned if ev.matched_account}
        ),
    }
