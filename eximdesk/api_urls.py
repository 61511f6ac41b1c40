from rest_framework.routers import DefaultRouter

from catalog.api import HSNCodeViewSet, ProductViewSet, SKUViewSet
from core.api import CompanyBankViewSet, CompanyViewSet
from documents.api import DocumentViewSet
from enquiries.api import EnquiryItemViewSet, EnquiryViewSet
from entities.api import EntityViewSet
from invoices.api import ProformaInvoiceViewSet, ProformaItemViewSet
from orders.api import ExportOrderViewSet, OrderItemViewSet, OrderPaymentViewSet
from purchasing.api import PurchaseOrderItemViewSet, PurchaseOrderPaymentViewSet, PurchaseOrderViewSet
from sales.api import QuoteItemViewSet, QuoteViewSet
from shipping.api import ShippingBillItemViewSet, ShippingBillViewSet

router = DefaultRouter()

router.register(r"company", CompanyViewSet, basename="company")
router.register(r"company-banks", CompanyBankViewSet, basename="companybank")

router.register(r"entities", EntityViewSet, basename="entity")
router.register(r"products", ProductViewSet, basename="product")
router.register(r"skus", SKUViewSet, basename="sku")
router.register(r"hsn-codes", HSNCodeViewSet, basename="hsncode")

router.register(r"enquiries", EnquiryViewSet, basename="enquiry")
router.register(r"enquiry-items", EnquiryItemViewSet, basename="enquiryitem")

router.register(r"quotes", QuoteViewSet, basename="quote")
router.register(r"quote-items", QuoteItemViewSet, basename="quoteitem")

router.register(r"proforma-invoices", ProformaInvoiceViewSet, basename="proformainvoice")
router.register(r"proforma-items", ProformaItemViewSet, basename="proformaitem")

router.register(r"export-orders", ExportOrderViewSet, basename="exportorder")
router.register(r"order-items", OrderItemViewSet, basename="orderitem")
router.register(r"order-payments", OrderPaymentViewSet, basename="orderpayment")

router.register(r"purchase-orders", PurchaseOrderViewSet, basename="purchaseorder")
router.register(r"purchase-order-items", PurchaseOrderItemViewSet, basename="purchaseorderitem")
router.register(r"purchase-order-payments", PurchaseOrderPaymentViewSet, basename="purchaseorderpayment")

router.register(r"shipping-bills", ShippingBillViewSet, basename="shippingbill")
router.register(r"shipping-bill-items", ShippingBillItemViewSet, basename="shippingbillitem")

router.register(r"documents", DocumentViewSet, basename="document")

urlpatterns = router.urls
