"""
Index creation, index listing and explain-based performance comparison.
"""

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from bookstore_queries.console import print_metrics, print_table, print_value
from bookstore_queries.logger import logger

TITLE_INDEX = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX = [("author", ASCENDING), ("published_year", DESCENDING)]


# ---------------------- CREATION ----------------------

async def create_title_index(books: AsyncCollection) -> str:
    result = await books.create_index(TITLE_INDEX)
    print_value("\nCreated Index:", result)
    return result


async def create_compound_index(books: AsyncCollection) -> str:
    result = await books.create_index(AUTHOR_YEAR_INDEX)
    print_value("Created Compound Index:", result)
    return result


# ---------------------- INSPECTION ----------------------

async def list_indexes(books: AsyncCollection) -> List[Dict[str, Any]]:
    """Return (and print) one entry per index: name, keys, unique flag."""
    raw_indexes = await books.index_information()

    indexes: List[Dict[str, Any]] = []
    for name, info in raw_indexes.items():
        indexes.append({
            "name": name,
            "keys": info.get("key", []),
            "unique": info.get("unique", False),
        })

    print_table("Indexes:", indexes)
    return indexes


# ---------------------- EXPLAIN ----------------------

def execution_metrics(explain: Dict[str, Any]) -> Dict[str, Any]:
    stats = explain.get("executionStats", {})
    return {
        "total_docs_examined": stats.get("totalDocsExamined"),
        "execution_time_ms": stats.get("executionTimeMillis"),
    }


def winning_plan_stage(explain: Dict[str, Any]) -> Optional[str]:
    """Stage name of the winning plan.

    Servers using the slot-based engine nest the plan under ``queryPlan``.
    """
    winning_plan = explain.get("queryPlanner", {}).get("winningPlan", {})
    if "stage" in winning_plan:
        return winning_plan["stage"]
    return winning_plan.get("queryPlan", {}).get("stage")


async def analyze_index_performance(books: AsyncCollection, title: str = "1984") -> Dict[str, Any]:
    """Compare an exact-title lookup without and with the title index.

    Drops every index first, so indexes created earlier in the same run are
    gone afterwards except the recreated title index.
    """
    query = {"title": title}

    # start clean
    await books.drop_indexes()
    logger.info("Dropped all indexes before explaining %s", query)

    before = execution_metrics(await books.find(query).explain())

    await books.create_index(TITLE_INDEX)

    after_explain = await books.find(query).explain()
    after = execution_metrics(after_explain)
    stage = winning_plan_stage(after_explain)

    print_metrics(before, after, stage)
    return {"before": before, "after": after, "winning_stage": stage}
