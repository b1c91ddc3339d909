"""Tests for lookup categories and their items."""

import pytest

from src.errors import BadRequestError, ConflictError, NotFoundError
from src.schemas import lookup as schemas


def _item(code: str, **overrides):
    data = {"name": code.title(), "name_ar": code, "code": code}
    data.update(overrides)
    return schemas.LookupItemCreate(**data)


def _category(code: str = "payment_terms", **overrides):
    data = {"name": "Payment terms", "name_ar": "شروط الدفع", "code": code}
    data.update(overrides)
    return schemas.LookupCategoryCreate(**data)


class TestLookupCategories:
    """Test category CRUD and the system guard."""

    @pytest.mark.asyncio
    async def test_create_with_items(self, service):
        category = await service.create_lookup_category(
            _category(items=[_item("cash", extra_data={"days": 0}), _item("net_30")])
        )

        assert [i.code for i in category.items] == ["cash", "net_30"]
        assert category.items[0].extra_data == {"days": 0}

    @pytest.mark.asyncio
    async def test_duplicate_code_conflicts(self, service):
        await service.create_lookup_category(_category())
        with pytest.raises(ConflictError):
            await service.create_lookup_category(_category())

    @pytest.mark.asyncio
    async def test_last_default_in_payload_wins(self, service):
        category = await service.create_lookup_category(
            _category(items=[_item("a", is_default=True), _item("b", is_default=True)])
        )

        defaults = [i.code for i in category.items if i.is_default]
        assert defaults == ["b"]

    @pytest.mark.asyncio
    async def test_system_category_cannot_be_deleted(self, service):
        category = await service.create_lookup_category(_category(is_system=True))

        with pytest.raises(BadRequestError):
            await service.delete_lookup_category(category.id)
        assert await service.get_lookup_category(category.id)

    @pytest.mark.asyncio
    async def test_system_category_cannot_be_deactivated(self, service):
        category = await service.create_lookup_category(_category(is_system=True))

        with pytest.raises(BadRequestError):
            await service.update_lookup_category(
                category.id, schemas.LookupCategoryUpdate(is_active=False)
            )

    @pytest.mark.asyncio
    async def test_system_category_can_be_renamed(self, service):
        category = await service.create_lookup_category(_category(is_system=True))

        updated = await service.update_lookup_category(
            category.id, schemas.LookupCategoryUpdate(name="new name")
        )
        assert updated.name == "new name"
        assert updated.is_active is True

    @pytest.mark.asyncio
    async def test_delete_removes_items(self, service):
        category = await service.create_lookup_category(_category(items=[_item("cash")]))
        item_id = category.items[0].id

        result = await service.delete_lookup_category(category.id)
        assert result["message"] == "Lookup category deleted successfully"

        with pytest.raises(NotFoundError):
            await service.get_lookup_item(item_id)

    @pytest.mark.asyncio
    async def test_get_by_code_returns_active_items_only(self, service):
        await service.create_lookup_category(
            _category(items=[_item("cash"), _item("cheque", is_active=False)])
        )

        category = await service.get_lookup_category_by_code("payment_terms")
        assert [i.code for i in category.items] == ["cash"]

    @pytest.mark.asyncio
    async def test_get_by_unknown_code(self, service):
        with pytest.raises(NotFoundError):
            await service.get_lookup_category_by_code("nope")

    @pytest.mark.asyncio
    async def test_list_orders_by_name(self, service):
        await service.create_lookup_category(_category("units", name="Units"))
        await service.create_lookup_category(_category("colors", name="Colors"))
        await service.create_lookup_category(_category("hidden", name="Hidden", is_active=False))

        listed = await service.list_lookup_categories()
        assert [c.code for c in listed] == ["colors", "units"]


class TestLookupItems:
    """Test item codes and the single default per category."""

    @pytest.mark.asyncio
    async def test_setting_default_demotes_previous(self, service):
        category = await service.create_lookup_category(
            _category(items=[_item("a", is_default=True), _item("b")])
        )
        item_a, item_b = category.items

        await service.update_lookup_item(item_b.id, schemas.LookupItemUpdate(is_default=True))

        assert (await service.get_lookup_item(item_a.id)).is_default is False
        assert (await service.get_lookup_item(item_b.id)).is_default is True

    @pytest.mark.asyncio
    async def test_adding_default_demotes_previous(self, service):
        category = await service.create_lookup_category(
            _category(items=[_item("a", is_default=True)])
        )

        new = await service.add_lookup_item(category.id, _item("b", is_default=True))

        reloaded = await service.get_lookup_category(category.id)
        assert [i.code for i in reloaded.items if i.is_default] == ["b"]
        assert new.is_default is True

    @pytest.mark.asyncio
    async def test_defaults_are_per_category(self, service):
        first = await service.create_lookup_category(_category("one", items=[_item("a", is_default=True)]))
        await service.create_lookup_category(_category("two", items=[_item("a", is_default=True)]))

        reloaded = await service.get_lookup_category(first.id)
        assert reloaded.items[0].is_default is True

    @pytest.mark.asyncio
    async def test_same_code_in_other_category(self, service):
        await service.create_lookup_category(_category("one", items=[_item("a")]))
        second = await service.create_lookup_category(_category("two"))

        item = await service.add_lookup_item(second.id, _item("a"))
        assert item.category_id == second.id

    @pytest.mark.asyncio
    async def test_same_code_in_category_conflicts(self, service):
        category = await service.create_lookup_category(_category(items=[_item("a")]))

        with pytest.raises(ConflictError):
            await service.add_lookup_item(category.id, _item("a"))

    @pytest.mark.asyncio
    async def test_add_to_missing_category(self, service):
        category = await service.create_lookup_category(_category())
        await service.delete_lookup_category(category.id)

        with pytest.raises(NotFoundError):
            await service.add_lookup_item(category.id, _item("a"))

    @pytest.mark.asyncio
    async def test_delete_item(self, service):
        category = await service.create_lookup_category(_category(items=[_item("a")]))

        await service.delete_lookup_item(category.items[0].id)
        assert (await service.get_lookup_category(category.id)).items == []
