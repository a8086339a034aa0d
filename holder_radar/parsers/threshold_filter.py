from holder_radar.parsers.holder_fetcher import Holder


def filter_by_minimum_ui_amount(holders: list[Holder], min_ui_amount: float) -> list[Holder]:
    """Keep holders whose decimal-adjusted balance is at least ``min_ui_amount``.

    A threshold of zero or below disables filtering entirely.
    """
    if min_ui_amount <= 0:
        return list(holders)
    return [h for h in holders if h.ui_amount >= min_ui_amount]
