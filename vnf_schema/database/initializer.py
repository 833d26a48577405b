"""
Schema initializer for the VNF config database.

Runs once against a MongoDB instance, in order:
- Provision the application user (readWrite on the target database)
- Create the yaml_latest and yaml_history collections
- Declare their indexes
- Log a completion line for the operator

Any failing step aborts the remaining ones. Nothing is rolled back.

In strict mode the user and collections are created unconditionally, so a
second run fails on the first duplicate. The default mode checks first and
leaves existing objects in place, making re-runs safe.
"""
import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from vnf_schema.config import Settings
from vnf_schema.database.databases import vnf_config_db
from vnf_schema.models.report import InitReport, UserAction

logger = logging.getLogger(__name__)


async def user_exists(db: AsyncIOMotorDatabase, username: str) -> bool:
    """Check whether `username` is defined on `db`."""
    result = await db.command("usersInfo", username)
    return bool(result.get("users"))


async def ensure_app_user(
    db: AsyncIOMotorDatabase,
    username: str,
    password: str,
    role: str = "readWrite",
    strict: bool = False,
) -> UserAction:
    """
    Provision the application credential scoped to `db`.

    Args:
        db: Target database, also the user's authentication database
        username: User name
        password: Clear-text password, hashed by the server
        role: Role granted on `db` only
        strict: Create unconditionally; a duplicate user raises OperationFailure

    Returns:
        UserAction.CREATED or UserAction.UPDATED
    """
    roles = vnf_config_db.app_user_roles(db.name, role)

    if not strict and await user_exists(db, username):
        await db.command("updateUser", username, pwd=password, roles=roles)
        logger.info(f"User '{username}' exists on {db.name}, password and roles reset")
        return UserAction.UPDATED

    await db.command("createUser", username, pwd=password, roles=roles)
    logger.info(f"Created user '{username}' with role {role} on {db.name}")
    return UserAction.CREATED


async def ensure_collections(
    db: AsyncIOMotorDatabase,
    names: list[str],
    strict: bool = False,
) -> tuple[list[str], list[str]]:
    """
    Create each named collection.

    In strict mode an existing collection raises CollectionInvalid.

    Returns:
        (created, existing) collection names
    """
    existing_names = set() if strict else set(await db.list_collection_names())
    created, existing = [], []

    for name in names:
        if name in existing_names:
            logger.info(f"Collection {db.name}.{name} already exists")
            existing.append(name)
            continue
        await db.create_collection(name)
        logger.info(f"Created collection {db.name}.{name}")
        created.append(name)

    return created, existing


async def create_indexes(db: AsyncIOMotorDatabase) -> dict[str, list[str]]:
    """
    Declare indexes for the VNF config collections.

    Re-declaring an identical index is a no-op on the server. An existing
    index with the same name but different options raises OperationFailure.
    """
    declared: dict[str, list[str]] = {}
    for collection_name, indexes in vnf_config_db.Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            name = await collection.create_index(keys, **kwargs)
            logger.info(f"Index {name} ready on {collection_name}")
            declared.setdefault(collection_name, []).append(name)
    return declared


async def initialize(
    client: AsyncIOMotorClient,
    settings: Settings,
    strict: bool = False,
    skip_user: bool = False,
) -> InitReport:
    """
    Prepare the configured database for the VNF configuration service.

    Args:
        client: Connected Motor client
        settings: Database name and application credential
        strict: Fail on an existing user or collection instead of reusing it
        skip_user: Leave user provisioning to someone else

    Returns:
        InitReport describing what was created or found
    """
    db = client[settings.mongo_database]
    report = InitReport(
        database=db.name,
        purpose=vnf_config_db.DB_MANIFEST["purpose"],
        user=settings.app_user_name,
    )
    logger.info(f"Initializing {db.name}: {report.purpose}")

    if skip_user:
        logger.info("Skipping application user provisioning")
    else:
        report.user_action = await ensure_app_user(
            db,
            settings.app_user_name,
            settings.app_user_password,
            role=settings.app_user_role,
            strict=strict,
        )

    report.collections_created, report.collections_existing = await ensure_collections(
        db, vnf_config_db.DB_MANIFEST["collections"], strict=strict
    )
    report.indexes = await create_indexes(db)
    report.finished_at = datetime.now(timezone.utc)

    logger.info(
        f"MongoDB initialization complete: database {db.name} created, "
        f"collections and indexes set"
    )
    return report
