"""Derived views over the immutable combination collection.

Everything here is a pure function of the base collection plus the current
table selection. The table is always recomputed as filter -> sort -> paginate.
"""

import math
from dataclasses import dataclass, replace

import numpy as np

from .models import (INPUT_RPMS, PAGE_SIZE, PERFECT_RATIO_PREVIEW,
                     PERFECT_RATIO_TOLERANCE, TARGET_RPM, SortKey,
                     SpeedCategory)
from .utils import format_gears, format_percent, format_ratio, format_rpm

ALL_RPMS = "all"

_SORTS = {
    SortKey.OUTPUT: (lambda c: c.output_rpm, True),
    SortKey.RATIO: (lambda c: c.gear_ratio, True),
    SortKey.INPUT: (lambda c: c.input_rpm, False),
}


def parse_rpm_filter(value):
    """Turn an RPM selector ("all", None or a number) into None or an int"""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip().lower()
    if text in ("", ALL_RPMS):
        return None
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Invalid RPM filter: '{value}' (use 'all' or a number)")


def filter_by_rpm(combinations, rpm=None):
    """Keep combinations driven at exactly `rpm`; None or "all" keeps everything"""
    rpm = parse_rpm_filter(rpm)
    if rpm is None:
        return list(combinations)
    return [combo for combo in combinations if combo.input_rpm == rpm]


def sort_combinations(combinations, sort_key=SortKey.OUTPUT):
    """Stable sort, so ties keep their generation order"""
    key, reverse = _SORTS[SortKey(sort_key)]
    return sorted(combinations, key=key, reverse=reverse)


def page_count(total, per_page=PAGE_SIZE):
    return max(1, math.ceil(total / per_page))


def paginate(items, page=1, per_page=PAGE_SIZE):
    """Slice one 1-based page out of items, clamping the page number"""
    total = len(items)
    pages = page_count(total, per_page)
    page = min(max(1, page), pages)
    start = (page - 1) * per_page
    return {
        "items": items[start:start + per_page],
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": pages,
        "has_prev": page > 1,
        "has_next": page < pages,
    }


@dataclass(frozen=True)
class ViewContext:
    """Current table selection over the base collection.

    Transitions return a new context instead of mutating shared state.
    """

    combinations: tuple
    rpm_filter: object = None
    sort_key: SortKey = SortKey.OUTPUT
    page: int = 1
    per_page: int = PAGE_SIZE

    def filtered(self):
        return filter_by_rpm(self.combinations, self.rpm_filter)

    def ordered(self):
        return sort_combinations(self.filtered(), self.sort_key)

    def total_pages(self):
        return page_count(len(self.filtered()), self.per_page)

    def with_filter(self, rpm_filter):
        return replace(self, rpm_filter=parse_rpm_filter(rpm_filter), page=1)

    def with_sort(self, sort_key):
        return replace(self, sort_key=SortKey(sort_key), page=1)

    def go_to(self, page):
        return replace(self, page=min(max(1, page), self.total_pages()))

    def next_page(self):
        if self.page >= self.total_pages():
            return self
        return replace(self, page=self.page + 1)

    def prev_page(self):
        if self.page <= 1:
            return self
        return replace(self, page=self.page - 1)

    def table(self):
        """Table view-model: filter, then sort, then slice the page"""
        result = paginate(self.ordered(), self.page, self.per_page)
        return {
            "rows": [combo.to_row() for combo in result["items"]],
            "page": result["page"],
            "pages": result["pages"],
            "per_page": result["per_page"],
            "total": result["total"],
            "has_prev": result["has_prev"],
            "has_next": result["has_next"],
            "page_info": f"Page {result['page']} of {result['pages']}",
            "rpm_filter": ALL_RPMS if self.rpm_filter is None else self.rpm_filter,
            "sort": SortKey(self.sort_key).value,
        }


def find_fastest(combinations):
    """Combination with the highest output RPM (first one wins ties)"""
    fastest = combinations[0]
    for combo in combinations[1:]:
        if combo.output_rpm > fastest.output_rpm:
            fastest = combo
    return fastest


def find_slowest(combinations):
    """Combination with the lowest output RPM (first one wins ties)"""
    slowest = combinations[0]
    for combo in combinations[1:]:
        if combo.output_rpm < slowest.output_rpm:
            slowest = combo
    return slowest


def find_balanced(combinations, target_rpm=TARGET_RPM):
    """Combination whose output RPM is closest to target_rpm"""
    balanced = combinations[0]
    smallest_difference = abs(balanced.output_rpm - target_rpm)
    for combo in combinations[1:]:
        difference = abs(combo.output_rpm - target_rpm)
        if difference < smallest_difference:
            smallest_difference = difference
            balanced = combo
    return balanced


def _setup_card(combo, title, best_for):
    return {
        "title": title,
        "input": f"{combo.input_rpm} RPM",
        "gears": combo.gears,
        "ratio": format_ratio(combo.gear_ratio),
        "output": format_rpm(combo.output_rpm),
        "best_for": best_for,
        "combination": combo.to_dict(),
    }


def optimization_summary(combinations, target_rpm=TARGET_RPM):
    """Fastest, slowest and balanced setups as display cards"""
    balanced = find_balanced(combinations, target_rpm)
    difference = abs(balanced.output_rpm - target_rpm)

    balanced_card = _setup_card(
        balanced,
        f"Most Balanced Setup (closest to {target_rpm} RPM)",
        "All-around performance, versatile robot",
    )
    balanced_card["target_rpm"] = target_rpm
    balanced_card["difference"] = difference
    balanced_card["difference_display"] = format_rpm(difference)

    return {
        "fastest": _setup_card(
            find_fastest(combinations),
            "Fastest Setup (Maximum Speed)",
            "Speed challenges, racing, quick traversal",
        ),
        "slowest": _setup_card(
            find_slowest(combinations),
            "Slowest Setup (Maximum Torque)",
            "Heavy lifting, climbing, pushing objects",
        ),
        "balanced": balanced_card,
    }


def compute_statistics(combinations, input_rpms=INPUT_RPMS):
    """Output RPM statistics over the full, unfiltered collection"""
    total = len(combinations)
    speeds = np.array([combo.output_rpm for combo in combinations], dtype=float)

    max_output = float(speeds.max())
    min_output = float(speeds.min())
    avg_output = float(speeds.mean())
    speed_range = max_output - min_output

    categories = []
    counts = {}
    for category in SpeedCategory:
        count = sum(1 for combo in combinations if combo.category is category)
        counts[category] = count
        percent = format_percent(count, total)
        categories.append({
            "category": category.label,
            "css_class": category.css_class,
            "count": count,
            "percent": percent,
            "percent_display": f"{percent:.1f}%",
        })

    rpm_distribution = [
        {
            "input_rpm": rpm,
            "count": sum(1 for combo in combinations if combo.input_rpm == rpm),
        }
        for rpm in input_rpms
    ]

    recommendations = []
    if counts[SpeedCategory.HIGH] > 50:
        recommendations.append("Plenty of high-speed options for racing challenges")
    if counts[SpeedCategory.LOW] > 30:
        recommendations.append("Good torque options available for heavy-duty tasks")
    recommendations.append(
        f"{format_rpm(avg_output)} average provides balanced performance"
    )
    recommendations.append(
        f"{format_rpm(speed_range)} range offers maximum flexibility"
    )

    return {
        "total": total,
        "max_output": max_output,
        "min_output": min_output,
        "avg_output": avg_output,
        "speed_range": speed_range,
        "max_display": format_rpm(max_output),
        "min_display": format_rpm(min_output),
        "avg_display": format_rpm(avg_output),
        "range_display": format_rpm(speed_range),
        "categories": categories,
        "rpm_distribution": rpm_distribution,
        "recommendations": recommendations,
    }


def is_whole_number(value, tolerance=PERFECT_RATIO_TOLERANCE):
    """Check if a number is close to a whole number"""
    return abs(value - round(value)) < tolerance


def find_perfect_ratios(combinations, preview=PERFECT_RATIO_PREVIEW):
    """Combinations with a whole-number gear ratio, in base collection order"""
    perfect = [combo for combo in combinations if is_whole_number(combo.gear_ratio)]
    total = len(combinations)
    count = len(perfect)
    percent = format_percent(count, total)

    items = []
    for combo in perfect[:preview]:
        items.append({
            "input": f"{combo.input_rpm} RPM",
            "gears": format_gears(combo.driving_gear, combo.driven_gear),
            "ratio": f"{round(combo.gear_ratio)}:1",
            "output": format_rpm(combo.output_rpm),
            "combination": combo.to_dict(),
        })

    remaining = max(0, count - preview)
    return {
        "count": count,
        "total": total,
        "percent": percent,
        "percent_display": f"{percent:.1f}%",
        "items": items,
        "remaining": remaining,
        "remaining_display": (
            f"... and {remaining} more perfect ratios" if remaining else ""
        ),
    }
