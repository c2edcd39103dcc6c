"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_coach.adapters.meal_plan_generator_client import (
    HttpxMealPlanGeneratorClient,
)
from nutrition_coach.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from nutrition_coach.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from nutrition_coach.adapters.supabase_exclusion_repository import (
    SupabaseExclusionRepository,
)
from nutrition_coach.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from nutrition_coach.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from nutrition_coach.adapters.supabase_user_repository import SupabaseUserRepository
from nutrition_coach.adapters.telegram_client import HttpxTelegramClient
from nutrition_coach.config import Settings
from nutrition_coach.services.cache import InMemoryCache
from nutrition_coach.services.catalog import CatalogService
from nutrition_coach.services.exclusions import ExclusionService
from nutrition_coach.services.inventory import InventoryService
from nutrition_coach.services.meal_plans import MealPlanService
from nutrition_coach.services.reporting import (
    ErrorReporter,
    LoggingErrorReporter,
    TelegramErrorReporter,
)
from nutrition_coach.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    catalog_service: CatalogService
    exclusion_service: ExclusionService
    inventory_service: InventoryService
    meal_plan_service: MealPlanService
    error_reporter: ErrorReporter
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    closers: list[Callable[[], Awaitable[None]]] = []

    openfoodfacts_client = None
    if resolved_settings.openfoodfacts_enabled:
        openfoodfacts_client = HttpxOpenFoodFactsClient.create(
            resolved_settings.openfoodfacts_base_url
        )
        closers.append(openfoodfacts_client.close)

    generator_client = None
    if resolved_settings.meal_plan_generator_url:
        generator_client = HttpxMealPlanGeneratorClient.create(
            resolved_settings.meal_plan_generator_url
        )
        closers.append(generator_client.close)

    error_reporter: ErrorReporter = LoggingErrorReporter()
    if resolved_settings.error_reports_enabled:
        telegram_client = HttpxTelegramClient.create(
            resolved_settings.telegram_bot_token
        )
        closers.append(telegram_client.close)
        error_reporter = TelegramErrorReporter(
            telegram_client=telegram_client,
            admin_chat_id=resolved_settings.admin_chat_id,
            environment=resolved_settings.environment,
        )

    user_service = UserService(SupabaseUserRepository(supabase_client))
    catalog_service = CatalogService(
        repository=SupabaseCatalogRepository(supabase_client),
        openfoodfacts_client=openfoodfacts_client,
        cache=InMemoryCache(),
    )
    exclusion_service = ExclusionService(
        repository=SupabaseExclusionRepository(supabase_client),
        catalog_service=catalog_service,
    )
    inventory_service = InventoryService(SupabaseInventoryRepository(supabase_client))
    meal_plan_service = MealPlanService(
        user_service=user_service,
        exclusion_service=exclusion_service,
        inventory_service=inventory_service,
        repository=SupabaseMealPlanRepository(supabase_client),
        generator=generator_client,
    )

    async def close_resources() -> None:
        for close in closers:
            await close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        catalog_service=catalog_service,
        exclusion_service=exclusion_service,
        inventory_service=inventory_service,
        meal_plan_service=meal_plan_service,
        error_reporter=error_reporter,
        close_resources=close_resources,
    )
