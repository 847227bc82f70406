from stockflow.models.company import Company
from stockflow.models.warehouse import Warehouse
from stockflow.models.supplier import Supplier
from stockflow.models.product import Product
from stockflow.models.inventory import Inventory, InventoryLog
