"""Tests for account service."""

from decimal import Decimal

import pytest

from ledgerkit.domain import errors
from ledgerkit.domain.entities import AccountCategory, AccountSpec, AccountType, AccountUpdate

COMPANY_ID = 1


def petty_cash_spec(**overrides):
    fields = dict(
        company_id=COMPANY_ID,
        code="1-1500",
        name="Petty Cash",
        account_type=AccountType.ASSET,
        category=AccountCategory.CURRENT_ASSET,
    )
    fields.update(overrides)
    return AccountSpec(**fields)


class TestCreateAccount:
    """Tests for account creation."""

    def test_create_account(self, account_service):
        """Test creating an account."""
        account_id = account_service.create_account(petty_cash_spec(description="Drawer"))

        account = account_service.get_account(account_id)
        assert account is not None
        assert account.code == "1-1500"
        assert account.account_type is AccountType.ASSET
        assert account.is_postable
        assert account.balance == 0
        assert account.description == "Drawer"

    def test_duplicate_code_conflicts(self, account_service):
        account_service.create_account(petty_cash_spec())
        with pytest.raises(errors.ConflictError, match="already exists"):
            account_service.create_account(petty_cash_spec(name="Other"))

    def test_same_code_in_other_company(self, account_service):
        """Test that codes are unique per company only."""
        account_service.create_account(petty_cash_spec())
        other_id = account_service.create_account(petty_cash_spec(company_id=2))
        assert account_service.get_account(other_id).company_id == 2

    def test_header_with_balance_is_rejected(self, account_service):
        with pytest.raises(errors.ValidationError, match="header account cannot have balance"):
            account_service.create_account(
                petty_cash_spec(is_header=True, balance=Decimal("10.00"))
            )

    def test_category_must_belong_to_type(self, account_service):
        with pytest.raises(errors.ValidationError, match="does not belong"):
            account_service.create_account(
                petty_cash_spec(category=AccountCategory.OPERATING_EXPENSE)
            )

    def test_unknown_parent(self, account_service):
        with pytest.raises(errors.NotFoundError):
            account_service.create_account(petty_cash_spec(parent_id=999))

    def test_parent_from_other_company(self, account_service):
        parent_id = account_service.create_account(
            petty_cash_spec(company_id=2, code="1-0000", is_header=True)
        )
        with pytest.raises(errors.ValidationError, match="another company"):
            account_service.create_account(petty_cash_spec(parent_id=parent_id))


class TestQueries:
    """Tests for account lookups and listings."""

    def test_get_account_not_found(self, account_service):
        assert account_service.get_account(999) is None
        with pytest.raises(errors.NotFoundError, match="Account 999 not found"):
            account_service.require_account(999)

    def test_get_account_by_code(self, seeded_chart, account_service):
        account = account_service.get_account_by_code(COMPANY_ID, "4-1000")
        assert account.name == "Sales Revenue"
        assert account_service.get_account_by_code(2, "4-1000") is None

    def test_list_accounts_ordered_by_code(self, seeded_chart, account_service):
        codes = [a.code for a in account_service.list_accounts(COMPANY_ID)]
        assert codes == sorted(codes)
        assert len(codes) == 29

    def test_list_accounts_by_type(self, seeded_chart, account_service):
        revenue = account_service.list_accounts_by_type(COMPANY_ID, AccountType.REVENUE)
        assert [a.code for a in revenue] == ["4-0000", "4-1000", "4-2000"]

    def test_list_active_accounts_excludes_headers_and_inactive(self, seeded_chart, account_service):
        account_service.update_account(seeded_chart["5-1400"].id, AccountUpdate(is_active=False))

        codes = [a.code for a in account_service.list_active_accounts(COMPANY_ID)]

        assert "1-0000" not in codes
        assert "5-1400" not in codes
        assert "1-1100" in codes
        assert len(codes) == 18


class TestUpdateAccount:
    """Tests for account updates."""

    def test_update_name_and_description(self, account_service):
        account_id = account_service.create_account(petty_cash_spec())

        updated = account_service.update_account(
            account_id, AccountUpdate(name="Cash Drawer", description="Front desk")
        )

        assert updated.name == "Cash Drawer"
        assert updated.description == "Front desk"
        assert updated.code == "1-1500"
        assert updated.is_active

    def test_deactivate(self, account_service):
        account_id = account_service.create_account(petty_cash_spec())
        updated = account_service.update_account(account_id, AccountUpdate(is_active=False))
        assert not updated.is_active
        assert not updated.is_postable

    def test_update_missing_account(self, account_service):
        with pytest.raises(errors.NotFoundError):
            account_service.update_account(999, AccountUpdate(name="Nope"))


class TestDeleteAccount:
    """Tests for account deletion."""

    def test_delete_unused_account(self, account_service):
        account_id = account_service.create_account(petty_cash_spec())
        account_service.delete_account(account_id)
        assert account_service.get_account(account_id) is None

    def test_delete_blocked_by_children(self, seeded_chart, account_service):
        with pytest.raises(errors.DependencyError, match="3 child accounts"):
            account_service.delete_account(seeded_chart["1-2000"].id)

    def test_delete_blocked_by_journal_entries(self, make_journal, seeded_chart, account_service):
        make_journal([("1-1100", "100.00", "0"), ("4-1000", "0", "100.00")], post=True)

        with pytest.raises(errors.DependencyError) as exc_info:
            account_service.delete_account(seeded_chart["1-1100"].id)

        assert "1 journal entry" in str(exc_info.value)
        assert "1 ledger row" in str(exc_info.value)
        assert account_service.get_account(seeded_chart["1-1100"].id) is not None


class TestSeedDefaultChart:
    """Tests for seeding the default chart of accounts."""

    def test_seed_creates_template(self, account_service):
        account_ids = account_service.seed_default_chart(COMPANY_ID)

        assert len(account_ids) == 29
        accounts = account_service.list_accounts(COMPANY_ID)
        assert {a.account_type for a in accounts} == set(AccountType)
        assert {a.level for a in accounts} == {1, 2, 3}
        assert sum(1 for a in accounts if a.is_header) == 10

    def test_seed_links_parents_by_code(self, seeded_chart):
        assert seeded_chart["1-1100"].parent_id == seeded_chart["1-1000"].id
        assert seeded_chart["1-1000"].parent_id == seeded_chart["1-0000"].id
        assert seeded_chart["1-0000"].parent_id is None
        assert seeded_chart["5-2000"].parent_id == seeded_chart["5-0000"].id

    def test_seed_categories_match_types(self, seeded_chart):
        for account in seeded_chart.values():
            assert account.category.account_type == account.account_type

    def test_seed_twice_conflicts(self, seeded_chart, account_service):
        with pytest.raises(errors.ConflictError, match="already has a chart"):
            account_service.seed_default_chart(COMPANY_ID)

    def test_seed_is_per_company(self, seeded_chart, account_service):
        account_service.seed_default_chart(2)
        assert len(account_service.list_accounts(2)) == 29
