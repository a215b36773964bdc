from rugqc.models.inspection import InspectionRecord
from rugqc.models.options import Customer, CustomOption
from rugqc.models.audit import AuditLog
