"""
Post-initialization checks for the VNF config database.

Read-only: nothing is inserted. Uniqueness is checked from the index
definitions rather than by probing with writes.
"""
import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from vnf_schema.database.databases import vnf_config_db
from vnf_schema.models.report import VerificationReport

logger = logging.getLogger(__name__)


def _user_collections(names: list[str]) -> set[str]:
    return {name for name in names if not name.startswith("system.")}


async def check_collections(db: AsyncIOMotorDatabase) -> list[str]:
    """The database must hold exactly the declared collections."""
    found = _user_collections(await db.list_collection_names())
    expected = set(vnf_config_db.Collections.ALL)
    problems = []
    for name in sorted(expected - found):
        problems.append(f"missing collection {name}")
    for name in sorted(found - expected):
        problems.append(f"unexpected collection {name}")
    return problems


def _same_keys(actual: list, expected: list[tuple[str, int]]) -> bool:
    if len(actual) != len(expected):
        return False
    return all(
        field == exp_field and direction == exp_direction
        for (field, direction), (exp_field, exp_direction) in zip(actual, expected)
    )


async def check_indexes(db: AsyncIOMotorDatabase) -> list[str]:
    """Every declared index must exist with the declared keys and uniqueness."""
    problems = []
    present = _user_collections(await db.list_collection_names())
    for collection_name, indexes in vnf_config_db.Collections.INDEXES.items():
        if collection_name not in present:
            continue
        info = await db[collection_name].index_information()
        for index_def in indexes:
            name = index_def["name"]
            actual = info.get(name)
            if actual is None:
                problems.append(f"missing index {name} on {collection_name}")
                continue
            if not _same_keys(actual["key"], index_def["keys"]):
                problems.append(
                    f"index {name} on {collection_name} has keys {actual['key']}, "
                    f"expected {index_def['keys']}"
                )
            if bool(actual.get("unique", False)) != index_def.get("unique", False):
                problems.append(
                    f"index {name} on {collection_name} unique={bool(actual.get('unique'))}, "
                    f"expected unique={index_def.get('unique', False)}"
                )
        if collection_name == vnf_config_db.Collections.YAML_HISTORY:
            problems.extend(_unique_filename_indexes(collection_name, info, indexes))
    return problems


def _unique_filename_indexes(collection_name: str, info: dict, declared: list[dict]) -> list[str]:
    """Undeclared indexes that make filename unique on the history collection."""
    declared_names = {index_def["name"] for index_def in declared}
    return [
        f"unexpected unique index {name} on {collection_name}.filename"
        for name, actual in info.items()
        if name not in declared_names
        and actual.get("unique", False)
        and _same_keys(actual["key"], [("filename", 1)])
    ]


def find_index_scans(plan: Any) -> list[str]:
    """Collect indexName of every IXSCAN stage in an explain plan tree."""
    found = []
    if isinstance(plan, dict):
        if plan.get("stage") == "IXSCAN" and "indexName" in plan:
            found.append(plan["indexName"])
        for value in plan.values():
            found.extend(find_index_scans(value))
    elif isinstance(plan, list):
        for item in plan:
            found.extend(find_index_scans(item))
    return found


async def explain_history_query(db: AsyncIOMotorDatabase, filename: str) -> dict:
    """Query planner output for "history of one file, newest first"."""
    return await db.command(
        "explain",
        {
            "find": vnf_config_db.Collections.YAML_HISTORY,
            "filter": {"filename": filename},
            "sort": {"timestamp": -1},
        },
        verbosity="queryPlanner",
    )


async def check_history_query_plan(
    db: AsyncIOMotorDatabase,
    filename: str = "example.yaml",
) -> tuple[Optional[str], list[str]]:
    """
    The history-by-file query must be served by the compound index.

    Returns:
        (index chosen by the planner or None, problems)
    """
    explain = await explain_history_query(db, filename)
    winning_plan = explain.get("queryPlanner", {}).get("winningPlan", {})
    scans = find_index_scans(winning_plan)
    if vnf_config_db.HISTORY_BY_FILE_INDEX in scans:
        return vnf_config_db.HISTORY_BY_FILE_INDEX, []

    chosen = scans[0] if scans else None
    return chosen, [
        f"history query uses {chosen or 'a collection scan'}, "
        f"expected {vnf_config_db.HISTORY_BY_FILE_INDEX}"
    ]


async def verify(db: AsyncIOMotorDatabase, filename: str = "example.yaml") -> VerificationReport:
    """Run every check and collect the problems found."""
    report = VerificationReport(
        database=db.name,
        collections=sorted(_user_collections(await db.list_collection_names())),
    )
    report.problems.extend(await check_collections(db))
    report.problems.extend(await check_indexes(db))

    # Without the collection there is no plan to inspect
    if vnf_config_db.Collections.YAML_HISTORY in report.collections:
        report.history_query_index, plan_problems = await check_history_query_plan(db, filename)
        report.problems.extend(plan_problems)

    for problem in report.problems:
        logger.warning(f"Verification: {problem}")
    if report.ok:
        logger.info(f"Database {db.name} matches the declared layout")
    return report
