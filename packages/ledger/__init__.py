"""Public interface for the ``ledger`` package.

The personal-finance core: identity store, external account registry,
transaction ledger, category catalog, provider catalog and input validation.
There is no runtime logic here, only symbol re-exports. ORM models live in
``ledger_db.models``.
"""

from .accounts import (
    delete_external_account,
    get_external_account,
    link_external_account,
    list_external_accounts,
    update_balance,
)
from .categories import (
    DEFAULT_CATEGORIES,
    EXTENDED_CATEGORIES,
    CategorySeed,
    create_category,
    get_category_by_name,
    list_categories,
    seed_categories,
)
from .errors import (
    FieldError,
    LedgerError,
    ReferentialViolation,
    UniquenessViolation,
    ValidationFailure,
)
from .identity import (
    authorize_credentials,
    create_session,
    create_user,
    create_verification_token,
    delete_session,
    delete_user,
    extend_session,
    get_user,
    get_user_by_auth_account,
    get_user_by_email,
    link_auth_account,
    list_auth_accounts,
    mark_email_verified,
    register_user,
    unlink_auth_account,
    update_user,
    use_verification_token,
    validate_session,
)
from .providers import ACCOUNT_PROVIDERS, ACCOUNT_TYPES, Provider, catalog_as_dict
from .transactions import (
    TRANSACTION_TYPES,
    create_transaction,
    delete_transaction,
    get_transaction,
    import_external_transactions,
    list_account_transactions,
    list_transactions,
    update_transaction,
)
from .validation import RegisterForm, SignInForm, validate_register, validate_sign_in

__all__ = [
    # Identity store
    "authorize_credentials",
    "create_session",
    "create_user",
    "create_verification_token",
    "delete_session",
    "delete_user",
    "extend_session",
    "get_user",
    "get_user_by_auth_account",
    "get_user_by_email",
    "link_auth_account",
    "list_auth_accounts",
    "mark_email_verified",
    "register_user",
    "unlink_auth_account",
    "update_user",
    "use_verification_token",
    "validate_session",
    # External accounts
    "ACCOUNT_PROVIDERS",
    "ACCOUNT_TYPES",
    "Provider",
    "catalog_as_dict",
    "delete_external_account",
    "get_external_account",
    "link_external_account",
    "list_external_accounts",
    "update_balance",
    # Transactions
    "TRANSACTION_TYPES",
    "create_transaction",
    "delete_transaction",
    "get_transaction",
    "import_external_transactions",
    "list_account_transactions",
    "list_transactions",
    "update_transaction",
    # Categories
    "CategorySeed",
    "DEFAULT_CATEGORIES",
    "EXTENDED_CATEGORIES",
    "create_category",
    "get_category_by_name",
    "list_categories",
    "seed_categories",
    # Validation / errors
    "FieldError",
    "LedgerError",
    "ReferentialViolation",
    "RegisterForm",
    "SignInForm",
    "UniquenessViolation",
    "ValidationFailure",
    "validate_register",
    "validate_sign_in",
]
