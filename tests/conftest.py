"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from nutrition_coach.adapters.openfoodfacts_client import OpenFoodFactsClient
from nutrition_coach.adapters.telegram_client import TelegramClient
from nutrition_coach.config import Settings
from nutrition_coach.containers import AppContainer
from nutrition_coach.domain.catalog import Product, Tag, TagType
from nutrition_coach.domain.exclusions import UserExclusions
from nutrition_coach.domain.inventory import InventoryItem, InventoryLocation
from nutrition_coach.domain.meal_plans import (
    GenerationInputs,
    MealPlan,
    ShoppingListItem,
)
from nutrition_coach.domain.models import UserProfile
from nutrition_coach.domain.nutrition import Goal
from nutrition_coach.services.cache import InMemoryCache
from nutrition_coach.services.catalog import CatalogRepository, CatalogService
from nutrition_coach.services.exclusions import ExclusionRepository, ExclusionService
from nutrition_coach.services.inventory import InventoryRepository, InventoryService
from nutrition_coach.services.meal_plans import (
    MealPlanGenerator,
    MealPlanRepository,
    MealPlanService,
)
from nutrition_coach.services.reporting import ErrorReporter
from nutrition_coach.services.users import UserRepository, UserService


def make_product(name: str = "Chicken breast", **overrides: object) -> Product:
    values: dict[str, object] = {
        "id": uuid4(),
        "name": name,
        "brand": None,
        "calories": 113.0,
        "protein": 23.6,
        "fat": 1.9,
        "carbs": 0.4,
        "fiber": 0.0,
        "category": "poultry",
        "unit": "г",
    }
    values.update(overrides)
    return Product(**values)  # type: ignore[arg-type]


def make_tag(
    name: str = "lactose", tag_type: TagType = TagType.ALLERGEN
) -> Tag:
    return Tag(id=uuid4(), name=name, name_ru=name, type=tag_type)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user profiles for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def add(
        self, goal: Goal | None = Goal.WEIGHT_LOSS, start_weight: float | None = 80
    ) -> UserProfile:
        profile = UserProfile(
            id=uuid4(),
            telegram_id=len(self.profiles) + 1000,
            goal=goal,
            start_weight=start_weight,
        )
        self.profiles[profile.id] = profile
        return profile

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory product catalog and tags."""

    products: dict[UUID, Product] = field(default_factory=dict)
    tags: dict[UUID, Tag] = field(default_factory=dict)
    created_payloads: list[dict[str, object]] = field(default_factory=list)

    def add_product(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def add_tag(self, tag: Tag) -> Tag:
        self.tags[tag.id] = tag
        return tag

    def search_products(self, query: str, limit: int) -> list[Product]:
        lowered = query.lower()
        matches = [p for p in self.products.values() if lowered in p.name.lower()]
        return matches[:limit]

    def get_by_openfoodfacts_code(self, code: str) -> Product | None:
        for product in self.products.values():
            if product.openfoodfacts_code == code:
                return product
        return None

    def create_product(self, payload: dict[str, object]) -> Product:
        self.created_payloads.append(payload)
        product = Product(
            id=uuid4(),
            name=str(payload["name"]),
            brand=payload.get("brand"),  # type: ignore[arg-type]
            calories=float(payload["calories"]),  # type: ignore[arg-type]
            protein=float(payload["protein"]),  # type: ignore[arg-type]
            fat=float(payload["fat"]),  # type: ignore[arg-type]
            carbs=float(payload["carbs"]),  # type: ignore[arg-type]
            fiber=float(payload["fiber"]),  # type: ignore[arg-type]
            category=str(payload["category"]),
            unit="г",
            openfoodfacts_code=str(payload["openfoodfacts_code"]),
        )
        self.products[product.id] = product
        return product

    def list_tags(self) -> list[Tag]:
        return sorted(self.tags.values(), key=lambda tag: (tag.type, tag.name))


@dataclass
class InMemoryExclusionRepository(ExclusionRepository):
    """Set-based exclusions joined against the in-memory catalog."""

    catalog: InMemoryCatalogRepository
    products: set[tuple[UUID, UUID]] = field(default_factory=set)
    tags: set[tuple[UUID, UUID]] = field(default_factory=set)

    def add_product(self, user_id: UUID, product_id: UUID) -> None:
        self.products.add((user_id, product_id))

    def remove_product(self, user_id: UUID, product_id: UUID) -> None:
        self.products.discard((user_id, product_id))

    def add_tag(self, user_id: UUID, tag_id: UUID) -> None:
        self.tags.add((user_id, tag_id))

    def remove_tag(self, user_id: UUID, tag_id: UUID) -> None:
        self.tags.discard((user_id, tag_id))

    def list_exclusions(self, user_id: UUID) -> UserExclusions:
        return UserExclusions(
            products=[
                self.catalog.products[product_id]
                for owner, product_id in self.products
                if owner == user_id and product_id in self.catalog.products
            ],
            tags=[
                self.catalog.tags[tag_id]
                for owner, tag_id in self.tags
                if owner == user_id and tag_id in self.catalog.tags
            ],
        )


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory rows."""

    items: dict[UUID, InventoryItem] = field(default_factory=dict)

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> InventoryItem:
        item = InventoryItem(
            id=uuid4(),
            user_id=user_id,
            product_id=UUID(str(payload["product_id"])),
            location=InventoryLocation(payload["location"]),
            quantity_grams=payload.get("quantity_grams"),  # type: ignore[arg-type]
            quantity_units=payload.get("quantity_units"),  # type: ignore[arg-type]
            expiry_date=(
                date.fromisoformat(str(payload["expiry_date"]))
                if payload.get("expiry_date")
                else None
            ),
        )
        self.items[item.id] = item
        return item

    def update_quantity(
        self, user_id: UUID, item_id: UUID, quantity_grams: float
    ) -> InventoryItem | None:
        item = self.items.get(item_id)
        if item is None or item.user_id != user_id:
            return None
        updated = InventoryItem(
            id=item.id,
            user_id=item.user_id,
            product_id=item.product_id,
            location=item.location,
            quantity_grams=quantity_grams,
            quantity_units=item.quantity_units,
            expiry_date=item.expiry_date,
            product_name=item.product_name,
        )
        self.items[item_id] = updated
        return updated

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        item = self.items.get(item_id)
        if item is None or item.user_id != user_id:
            return False
        del self.items[item_id]
        return True

    def list_items(self, user_id: UUID) -> list[InventoryItem]:
        return [item for item in self.items.values() if item.user_id == user_id]


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    plans: dict[UUID, MealPlan] = field(default_factory=dict)
    shopping_items: dict[UUID, list[ShoppingListItem]] = field(default_factory=dict)

    def get_plan(self, meal_plan_id: UUID) -> MealPlan | None:
        return self.plans.get(meal_plan_id)

    def list_shopping_items(self, meal_plan_id: UUID) -> list[ShoppingListItem]:
        return sorted(
            self.shopping_items.get(meal_plan_id, []),
            key=lambda item: (item.category, item.product_name),
        )


@dataclass
class RecordingGenerator(MealPlanGenerator):
    """Captures generation inputs instead of building a plan."""

    calls: list[GenerationInputs] = field(default_factory=list)
    plan_id: UUID = field(default_factory=uuid4)

    async def generate(self, inputs: GenerationInputs) -> UUID:
        self.calls.append(inputs)
        return self.plan_id


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    search_payload: dict[str, object] = field(default_factory=lambda: {"products": []})
    products: dict[str, dict[str, object]] = field(default_factory=dict)
    search_calls: int = 0
    fail_search: bool = False

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        self.search_calls += 1
        if self.fail_search:
            raise RuntimeError("OpenFoodFacts is down")
        return self.search_payload

    async def get_product(self, code: str) -> dict[str, object]:
        product = self.products.get(code)
        if product is None:
            return {"status": 0}
        return {"status": 1, "code": code, "product": product}


@dataclass
class FakeTelegramClient(TelegramClient):
    messages: list[tuple[int, str]] = field(default_factory=list)

    async def send_message(self, chat_id: int, text: str) -> None:
        self.messages.append((chat_id, text))


@dataclass
class RecordingErrorReporter(ErrorReporter):
    events: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    async def report(self, event: str, context: dict[str, object]) -> None:
        self.events.append((event, context))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openfoodfacts_enabled=False,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def exclusion_repository(
    catalog_repository: InMemoryCatalogRepository,
) -> InMemoryExclusionRepository:
    return InMemoryExclusionRepository(catalog_repository)


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def meal_plan_repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def openfoodfacts_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def error_reporter() -> RecordingErrorReporter:
    return RecordingErrorReporter()


@pytest.fixture
def catalog_service(
    catalog_repository: InMemoryCatalogRepository,
    openfoodfacts_client: FakeOpenFoodFactsClient,
) -> CatalogService:
    return CatalogService(
        repository=catalog_repository,
        openfoodfacts_client=openfoodfacts_client,
        cache=InMemoryCache(),
        retry_attempts=0,
    )


@pytest.fixture
def exclusion_service(
    exclusion_repository: InMemoryExclusionRepository,
    catalog_service: CatalogService,
) -> ExclusionService:
    return ExclusionService(exclusion_repository, catalog_service)


@pytest.fixture
def inventory_service(
    inventory_repository: InMemoryInventoryRepository,
) -> InventoryService:
    return InventoryService(inventory_repository)


@pytest.fixture
def meal_plan_service(
    user_repository: InMemoryUserRepository,
    exclusion_service: ExclusionService,
    inventory_service: InventoryService,
    meal_plan_repository: InMemoryMealPlanRepository,
    generator: RecordingGenerator,
) -> MealPlanService:
    return MealPlanService(
        user_service=UserService(user_repository),
        exclusion_service=exclusion_service,
        inventory_service=inventory_service,
        repository=meal_plan_repository,
        generator=generator,
    )


@pytest.fixture
def container(
    settings: Settings,
    catalog_service: CatalogService,
    exclusion_service: ExclusionService,
    inventory_service: InventoryService,
    meal_plan_service: MealPlanService,
    error_reporter: RecordingErrorReporter,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=meal_plan_service.user_service,
        catalog_service=catalog_service,
        exclusion_service=exclusion_service,
        inventory_service=inventory_service,
        meal_plan_service=meal_plan_service,
        error_reporter=error_reporter,
        close_resources=close_resources,
    )
