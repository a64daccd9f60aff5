"""Input normalization for host role tags and option names.

Provides mappings from the spellings a host may use for column roles and
visual options to the internal identifiers used by the engine.
"""

ROLE_MAP = {
    "labels": "label",
    "label": "label",
    "name": "label",
    "current_values": "current_value",
    "currentValue": "current_value",
    "current_value": "current_value",
    "value": "current_value",
    "prior_values": "prior_value",
    "priorValue": "prior_value",
    "prior_value": "prior_value",
    "lastValue": "prior_value",
    "period_values": "period_value",
    "periodValue": "period_value",
    "periodKey": "period_value",
    "period_value": "period_value",
    "year": "period_value",
    "period_labels": "period_label",
    "periodLabel": "period_label",
    "period_label": "period_label",
    "year_label": "period_label",
    "period_sub_labels": "period_sub_label",
    "periodSubLabel": "period_sub_label",
    "period_sub_label": "period_sub_label",
    "month_label": "period_sub_label",
}

OPTION_MAP = {
    "barLabelColor": "bar_label_color",
    "textColor": "text_color",
    "fontFamily": "font_family",
    "yearSize": "year_size",
    "monthSize": "month_size",
    "barsToShow": "bars_to_show",
    "intervalTiming": "interval_timing",
    "valueFormat": "value_format",
    "showControls": "show_controls",
    "repeatLoop": "repeat_loop",
}


def normalize_role(tag: str) -> str | None:
    """Normalize a host role tag to an internal role name.

    Args:
        tag: Role tag like ``"current_values"`` or ``"priorValue"``.

    Returns:
        The internal role (for example ``"current_value"``), or None if the
        tag is not a known role.
    """
    return ROLE_MAP.get(tag)


def normalize_option(key: str) -> str:
    """Normalize a camelCase option name to its snake_case field name."""
    return OPTION_MAP.get(key, key)
