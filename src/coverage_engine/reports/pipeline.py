"""One pass of the join/classify/bucket pipeline over two dataset snapshots."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from ..buckets.engine import BucketingEngine
from ..core.models import Account, EngagementEvent
from ..core.spec import EngineSpec, default_spec
from ..index.domain_index import DomainIndex
from ..stats.aggregator import build_account_frame


@dataclass(frozen=True)
class Pipeline:
    accounts: tuple[Account, ...]
    events: tuple[EngagementEvent, ...]
    index: DomainIndex
    frame: pd.DataFrame
    spec: EngineSpec


def build_pipeline(
    accounts: Sequence[Account],
    events: Sequence[EngagementEvent],
    spec: EngineSpec | None = None,
) -> Pipeline:
    spec = spec or default_spec()
    index = DomainIndex.build(accounts, events)
    frame = build_account_frame(accounts, index, BucketingEngine(spec))
    return Pipeline(
        accounts=tuple(accounts),
        events=tuple(events),
        index=index,
        frame=frame,
        spec=spec,
    )
