import logging

from .aio import debounce, delay, parallel, retry, sequential, throttle, timeout
from .arrays import (
    append_universal_option,
    array_to_object,
    chunk,
    first,
    group_by,
    is_equal,
    last,
    remove,
    rename_tree_nodes,
    sample,
    shuffle,
    transform_tree,
    unique,
)
from .config import Settings, configure, get_settings, reset_settings
from .dates import (
    DateLike,
    add,
    add_days,
    add_months,
    add_years,
    create_date,
    diff,
    end_of,
    format_chat_time,
    format_date,
    format_full_time,
    format_human_readable,
    from_now,
    get_day_of_week,
    get_days_in_month,
    is_date_in_range,
    is_millisecond_timestamp,
    normalize_timestamp,
    now,
    parse_date,
    start_of,
    to_datetime,
    to_timestamp,
)
from .duration import DurationParts, decompose_duration, format_duration
from .locales import EnLocale, Locale, ZhCnLocale, available_locales, get_locale
from .numeric import (
    clamp,
    format_currency,
    format_number_with_ten_thousand,
    format_thousands,
    is_even,
    is_odd,
    percentage,
    random_int,
    round_number,
)
from .objects import (
    deep_clone,
    deep_merge,
    filter_object_by_keys,
    get,
    has_own_prop,
    invert,
    map_keys,
    map_values,
    merge,
    object_to_query_string,
    omit,
    pick,
)
from .predicates import (
    is_array,
    is_boolean,
    is_class,
    is_date,
    is_empty,
    is_empty_object,
    is_function,
    is_map,
    is_mobile_phone,
    is_nan,
    is_none,
    is_number,
    is_object,
    is_plain_object,
    is_primitive,
    is_promise,
    is_regexp,
    is_set,
    is_string,
)
from .ranges import (
    COMMON_DATE_SHORTCUTS,
    DateRange,
    create_date_shortcuts,
    get_date_by_offset,
    get_last_days_range,
    get_last_months_range,
    get_last_weeks_range,
    get_this_half_year_range,
    get_this_month_range,
    get_this_quarter_range,
    get_this_week_range,
    get_this_year_range,
    get_today_range,
    get_today_str,
    get_yesterday_str,
)
from .strings import (
    camel_to_kebab,
    capitalize,
    ensure_rpx_unit,
    escape_html,
    is_empty_string,
    is_valid_email,
    is_valid_url,
    kebab_to_camel,
    parse_json_str,
    random_string,
    render_template,
    replace_nbsp,
    truncate,
)
from .url import get_query_stringify

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # configuration and locales
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",
    "Locale",
    "EnLocale",
    "ZhCnLocale",
    "available_locales",
    "get_locale",
    # strings
    "capitalize",
    "camel_to_kebab",
    "kebab_to_camel",
    "truncate",
    "random_string",
    "escape_html",
    "is_valid_url",
    "is_valid_email",
    "is_empty_string",
    "ensure_rpx_unit",
    "replace_nbsp",
    "render_template",
    "parse_json_str",
    # numbers
    "round_number",
    "format_thousands",
    "format_currency",
    "clamp",
    "random_int",
    "is_even",
    "is_odd",
    "percentage",
    "format_number_with_ten_thousand",
    # dates
    "DateLike",
    "to_datetime",
    "create_date",
    "to_timestamp",
    "is_millisecond_timestamp",
    "normalize_timestamp",
    "format_date",
    "format_full_time",
    "now",
    "parse_date",
    "diff",
    "add",
    "add_days",
    "add_months",
    "add_years",
    "get_day_of_week",
    "is_date_in_range",
    "get_days_in_month",
    "from_now",
    "start_of",
    "end_of",
    "format_human_readable",
    "format_chat_time",
    # durations
    "DurationParts",
    "decompose_duration",
    "format_duration",
    # date ranges
    "DateRange",
    "get_date_by_offset",
    "get_today_str",
    "get_yesterday_str",
    "get_today_range",
    "get_this_week_range",
    "get_this_month_range",
    "get_this_quarter_range",
    "get_this_half_year_range",
    "get_this_year_range",
    "get_last_days_range",
    "get_last_weeks_range",
    "get_last_months_range",
    "COMMON_DATE_SHORTCUTS",
    "create_date_shortcuts",
    # arrays
    "remove",
    "unique",
    "chunk",
    "first",
    "last",
    "shuffle",
    "sample",
    "is_equal",
    "group_by",
    "append_universal_option",
    "rename_tree_nodes",
    "transform_tree",
    "array_to_object",
    # objects
    "has_own_prop",
    "deep_clone",
    "get",
    "pick",
    "omit",
    "object_to_query_string",
    "merge",
    "deep_merge",
    "filter_object_by_keys",
    "map_keys",
    "map_values",
    "invert",
    # predicates
    "is_string",
    "is_number",
    "is_boolean",
    "is_function",
    "is_class",
    "is_object",
    "is_array",
    "is_date",
    "is_regexp",
    "is_promise",
    "is_map",
    "is_set",
    "is_primitive",
    "is_none",
    "is_empty_object",
    "is_empty",
    "is_nan",
    "is_plain_object",
    "is_mobile_phone",
    # async
    "delay",
    "timeout",
    "retry",
    "debounce",
    "throttle",
    "parallel",
    "sequential",
    # deprecated
    "get_query_stringify",
]
