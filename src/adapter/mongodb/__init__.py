"""MongoDB adapters and collection names."""

USERS_COLLECTION_NAME = 'users'
PRODUCTS_COLLECTION_NAME = 'products'
LEAD_EMAILS_COLLECTION_NAME = 'lead_emails'
