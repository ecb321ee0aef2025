"""
End-to-end checks against a running asset API: login + stats, and hierarchy creation
"""

import json
import logging
from typing import Dict, List, Optional

from .client import AssetApiClient
from .exceptions import ApiError


def _describe(error: ApiError) -> str:
    if error.status_code is not None:
        return f"{error.status_code} {error.message}"
    return error.message


def find_product(categories: List[Dict], category_id: str, type_name: str, product_name: str) -> Optional[Dict]:
    """Locate a top-level product by category id, type name and product name"""
    for category in categories:
        if category.get("_id") != category_id:
            continue
        for type_ in category.get("types", []):
            if type_.get("name") != type_name:
                continue
            for product in type_.get("products", []):
                if product.get("name") == product_name:
                    return product
    return None


class StatsCheck:
    """Log in and fetch the per-product category stats"""

    def __init__(self, client: AssetApiClient, email: str, password: str):
        self.client = client
        self.email = email
        self.password = password

        # Setup logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.logger = logging.getLogger(__name__)

    def run(self) -> int:
        print("Logging in...")
        try:
            login_data = self.client.login(self.email, self.password)
        except ApiError as e:
            self.logger.error(f"Login failed: {e}")
            print(f"Login failed: {_describe(e)}")
            return 1

        print("Login successful. Token obtained.")
        store = login_data.get("assignedStore")
        if isinstance(store, dict):
            store = json.dumps(store)
        print(f"User Store: {store}")

        print("Fetching stats...")
        try:
            stats = self.client.get_category_stats()
        except ApiError as e:
            self.logger.error(f"Stats fetch failed: {e}")
            print(f"Stats fetch failed: {_describe(e)}")
            return 1

        print("Stats fetched successfully.")
        print(f"Items count: {len(stats)}")
        if stats:
            print(f"First Item: {json.dumps(stats[0], indent=2)}")
        else:
            print("Stats array is empty.")
        return 0


class HierarchyCheck:
    """Create a category, type, product and child product, stopping at the first failure"""

    def __init__(self, client: AssetApiClient, email: str, password: str,
                 category_name="Test Category", type_name="Test Type",
                 product_name="Test Product", child_name="Test Child Product"):
        self.client = client
        self.email = email
        self.password = password
        self.category_name = category_name
        self.type_name = type_name
        self.product_name = product_name
        self.child_name = child_name

        # Setup logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.logger = logging.getLogger(__name__)

    def _fail(self, step: str, error) -> int:
        message = error.message if isinstance(error, ApiError) else str(error)
        self.logger.error(f"{step} failed: {error}")
        print(f"✗ {step} failed: {message}")
        return 1

    def run(self) -> int:
        try:
            self.client.login(self.email, self.password)
        except ApiError as e:
            return self._fail("Login", e)
        print("✓ Login successful")

        try:
            category = self.client.create_category(self.category_name)
        except ApiError as e:
            return self._fail("Category creation", e)
        category_id = category.get("_id") if isinstance(category, dict) else None
        if not category_id:
            return self._fail("Category creation", "Response carried no category id")
        print(f"✓ Category created: {category.get('name', self.category_name)}")

        try:
            self.client.add_type(category_id, self.type_name)
        except ApiError as e:
            return self._fail("Type creation", e)
        print(f"✓ Type added: {self.type_name}")

        try:
            self.client.add_product(category_id, self.type_name, self.product_name)
        except ApiError as e:
            return self._fail("Product creation", e)
        print(f"✓ Product added: {self.product_name}")

        try:
            categories = self.client.list_categories()
            product = find_product(categories, category_id, self.type_name, self.product_name)
            if product is None:
                return self._fail("Child product creation", "Parent product not found in category listing")
            self.client.add_child_product(product["_id"], self.child_name)
        except ApiError as e:
            return self._fail("Child product creation", e)
        print(f"✓ Child product added: {self.child_name}")
        return 0
