from .user_model import User, Role
from .product_model import Product, ProductStatus, LISTED_STATUSES, CATEGORIES, CONDITIONS
from .conversation_model import Conversation, Message
from .payment_model import PaymentMethod
from .transaction_model import Transaction, TransactionStatus
from .report_model import Report, ReportStatus, REPORT_TRANSITIONS
from .session_model import UserSession
