import os
import tempfile

# must run before serviceshop.config is imported
_tmp = os.path.join(tempfile.gettempdir(), "serviceshop_tests")
os.makedirs(_tmp, exist_ok=True)
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp, 'test.db')}"
os.environ["ADMIN_KEY"] = "test-admin-key"
os.environ["PDF_DIR"] = os.path.join(_tmp, "pdfs")
os.environ["OFFER_PERCENTAGE_POLICY"] = "reject"
os.environ["SERIALIZE_PRODUCT_UPDATES"] = "false"
