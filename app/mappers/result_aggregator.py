from app.schemas.scrape import BatchResult, SiteRecord


def has_data(record: SiteRecord) -> bool:
    return record.data.has_data()


def build_batch_result(records: list[SiteRecord]) -> BatchResult:
    """Keep only sites that yielded data, in the order they were given."""
    return BatchResult(results=[r for r in records if has_data(r)])
