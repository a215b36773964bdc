from rugqc.extensions import db
from datetime import datetime, timezone

from rugqc.constants import (
    COMPANY_NAMES, ORDER_FIELDS, QUANTITY_FIELDS, PRODUCT_QUALITY_CHECKS, PRODUCT_QUALITY_TEXT,
    LABELING_CHECKS, PACKAGING_CHECKS, PACKAGING_TEXT, ADDITIONAL_CHECKS, YES_NO_FIELDS,
    DEFECT_TRACKING_TEXT,
)


class InspectionRecord(db.Model):
    """A submitted final inspection. Written once, never updated."""
    __tablename__ = 'final_inspections'

    id = db.Column(db.Integer, primary_key=True)
    company = db.Column(db.String(10), nullable=False)
    document_no = db.Column(db.String(50), nullable=False)

    # Order
    inspection_date = db.Column(db.String(10), nullable=False)
    qc_inspector_name = db.Column(db.String(200), nullable=False)
    customer_name = db.Column(db.String(200), nullable=False)
    customer_code = db.Column(db.String(50), nullable=False)
    customer_po_no = db.Column(db.String(100), nullable=False)
    ops_no = db.Column(db.String(100), nullable=False)
    buyer_design_name = db.Column(db.String(200), nullable=False)
    empl_design_no = db.Column(db.String(100), nullable=False)
    color_name = db.Column(db.String(100), nullable=False)
    product_sizes = db.Column(db.String(500), nullable=False)
    merchant = db.Column(db.String(200), nullable=False)

    # Quantities
    total_order_qty = db.Column(db.Integer, nullable=False, default=0)
    inspected_lot_qty = db.Column(db.Integer, nullable=False, default=0)
    aql = db.Column(db.String(10), nullable=False)
    sample_size = db.Column(db.Integer, nullable=False, default=0)
    accepted_qty = db.Column(db.Integer, nullable=False, default=0)
    rejected_qty = db.Column(db.Integer, nullable=False, default=0)

    # Section documents: {field: value}
    product_quality = db.Column(db.JSON, default=dict)
    labeling = db.Column(db.JSON, default=dict)
    packaging = db.Column(db.JSON, default=dict)
    additional_checks = db.Column(db.JSON, default=dict)

    dpci_sku_style_number = db.Column(db.String(100))
    style_description = db.Column(db.String(500))
    defects = db.Column(db.JSON, default=list)

    # Photos: {slot_key: url}, [url, ...], {check_field: url}
    photos = db.Column(db.JSON, default=dict)
    other_photos = db.Column(db.JSON, default=list)
    not_ok_photos = db.Column(db.JSON, default=dict)

    qc_inspector_remarks = db.Column(db.Text)
    inspection_result = db.Column(db.String(10), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    created_by = db.Column(db.String(100))

    @property
    def company_name(self):
        return COMPANY_NAMES.get(self.company, self.company)

    def to_document(self):
        """Flat field -> value view of the record, the shape the renderers read."""
        doc = {
            'id': self.id,
            'company': self.company,
            'company_name': self.company_name,
            'document_no': self.document_no,
            'aql': self.aql,
            'dpci_sku_style_number': self.dpci_sku_style_number or '',
            'style_description': self.style_description or '',
            'qc_inspector_remarks': self.qc_inspector_remarks or '',
            'inspection_result': self.inspection_result,
            'defects': list(self.defects or []),
            'photos': dict(self.photos or {}),
            'other_photos': list(self.other_photos or []),
            'not_ok_photos': dict(self.not_ok_photos or {}),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'created_by': self.created_by,
        }
        for field in ORDER_FIELDS + QUANTITY_FIELDS:
            doc[field] = getattr(self, field)
        for section in (self.product_quality, self.labeling, self.packaging, self.additional_checks):
            doc.update(section or {})
        return doc

    def to_summary(self):
        return {
            'id': self.id,
            'company': self.company,
            'document_no': self.document_no,
            'inspection_date': self.inspection_date,
            'customer_name': self.customer_name,
            'customer_code': self.customer_code,
            'buyer_design_name': self.buyer_design_name,
            'ops_no': self.ops_no,
            'qc_inspector_name': self.qc_inspector_name,
            'inspection_result': self.inspection_result,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


# Which JSON column each non-column field is stored in
SECTION_FIELDS = {
    'product_quality': YES_NO_FIELDS + PRODUCT_QUALITY_CHECKS + PRODUCT_QUALITY_TEXT,
    'labeling': LABELING_CHECKS,
    'packaging': PACKAGING_CHECKS + PACKAGING_TEXT,
    'additional_checks': ADDITIONAL_CHECKS,
}

SCALAR_TEXT_FIELDS = DEFECT_TRACKING_TEXT + ['qc_inspector_remarks']
