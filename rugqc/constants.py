"""Static option lists for the final inspection form.

User-added values are layered on top of these by
``rugqc.services.option_store.OptionRegistry``.
"""

COMPANIES = ('EHI', 'EMPL')

COMPANY_NAMES = {
    'EHI': 'Eastern Home Industries',
    'EMPL': 'Eastern Mills Pvt. Ltd.',
}

DOCUMENT_NUMBERS = {
    'EHI': 'EHI/IP/01',
    'EMPL': 'EMPL/IP/01',
}

DEFAULT_COMPANY = 'EHI'

QC_INSPECTORS = [
    'Mahfooz Khan',
    'Faizan',
    'Gulab',
]

MERCHANTS = [
    'Haider',
    'Jozey',
    'Shagun',
    'Shahbaz',
    'Sumant',
    'Zahid',
]

BUYER_DESIGNS = [
    'Aegean', 'Agra', 'Amara', 'Amber', 'Andorra', 'Ankara', 'Antique', 'Arabesque', 'Aria', 'Artisan',
    'Ashton', 'Atlas', 'Aurora', 'Avalon', 'Avery', 'Azure', 'Babylon', 'Barcelona', 'Barrington', 'Bellini',
    'Bengal', 'Berlin', 'Bermuda', 'Bethany', 'Beverly', 'Bianca', 'Birch', 'Blossom', 'Bohemian', 'Bombay',
    'Bordeaux', 'Brighton', 'Bristol', 'Brooklyn', 'Brussels', 'Cairo', 'Calabria', 'Cambridge', 'Capri', 'Carmen',
    'Carolina', 'Casablanca', 'Cascade', 'Catalina', 'Celestia', 'Celtic', 'Chantilly', 'Charleston', 'Chelsea',
    'Chester', 'Chevron', 'Claudia', 'Coastal', 'Colonial', 'Como', 'Copenhagen', 'Coral', 'Cordoba', 'Cornwall',
    'Corsica', 'Cosmopolitan', 'Coventry', 'Cyprus', 'Dakota', 'Damascus', 'Damask', 'Delhi', 'Devon', 'Diamond',
    'Dynasty', 'Eclipse', 'Eden', 'Edinburgh', 'Elegance', 'Elite', 'Emerald', 'Empire', 'Essence', 'Eternity',
    'Europa', 'Everest', 'Fez', 'Fiesta', 'Flora', 'Florence', 'Fontana', 'Fusion', 'Galaxy', 'Geneva', 'Genoa',
    'Granada', 'Grecian', 'Greenwich', 'Hampton', 'Harmony', 'Havana', 'Heritage', 'Himalaya', 'Hudson',
    'Imperial', 'Infinity', 'Isfahan', 'Istanbul', 'Ivory', 'Jade', 'Jaipur', 'Java', 'Jewel', 'Kashmir',
    'Kilim', 'Kingston', 'Kyoto', 'Laguna', 'Lancaster', 'Legend', 'Lexington', 'Liberty', 'Lotus', 'Luna',
    'Luxor', 'Lyon', 'Madrid', 'Mahal', 'Malibu', 'Malta', 'Manhattan', 'Marakesh', 'Marina', 'Marseille',
    'Mediterranean', 'Meridian', 'Milan', 'Monaco', 'Morocco', 'Mumbai', 'Mystic', 'Naples', 'Natural', 'Nepal',
    'Newport', 'Nirvana', 'Nordic', 'Normandy', 'Other',
]

AQL_LEVELS = ['0.65', '1.0', '1.5', '2.5', '4.0', '6.5']
DEFAULT_AQL = '2.5'

MATERIAL_TYPES = [
    '100% Wool',
    '100% Cotton',
    '100% Jute',
    '100% Polyester',
    '100% Viscose',
    'Wool/Cotton',
    'Wool/Viscose',
    'Wool/Jute',
    'Jute/Cotton',
    'Polypropylene',
    'Other',
]

PRODUCT_SIZES = [
    "2'x3'", "2'6\"x8'", "3'x5'", "4'x6'", "5'x8'", "6'x9'",
    "8'x10'", "9'x12'", "10'x14'", "8' Round", "Custom",
]

PACKING_TYPES = ['Solid', 'Assorted']

OK_NOT_OK = ('OK', 'NOT OK')
YES_NO = ('Yes', 'No')
INSPECTION_RESULTS = ('PASS', 'FAIL')

DEFECT_CODES = [
    {'code': 'D01', 'description': 'Color variation / shading'},
    {'code': 'D02', 'description': 'Size out of tolerance'},
    {'code': 'D03', 'description': 'Loose or missing tufts'},
    {'code': 'D04', 'description': 'Uneven pile height'},
    {'code': 'D05', 'description': 'Backing glue / latex showing'},
    {'code': 'D06', 'description': 'Binding / edge defect'},
    {'code': 'D07', 'description': 'Fringe defect'},
    {'code': 'D08', 'description': 'Stain / soiling'},
    {'code': 'D09', 'description': 'Design / motif mismatch'},
    {'code': 'D10', 'description': 'Shedding'},
    {'code': 'D11', 'description': 'Odor'},
    {'code': 'D12', 'description': 'Wrinkle / not lying flat'},
    {'code': 'D13', 'description': 'Wrong or missing label'},
    {'code': 'D14', 'description': 'Packaging damage'},
    {'code': 'D15', 'description': 'Moisture above limit'},
]

DEFECT_DESCRIPTIONS = {d['code']: d['description'] for d in DEFECT_CODES}

# Required-slot photos, in report order
PHOTO_TYPES = [
    {'key': 'approved_sample_photo', 'label': 'Approved Sample'},
    {'key': 'id_photo', 'label': 'ID Photo'},
    {'key': 'red_seal_front_photo', 'label': 'Red Seal - Front'},
    {'key': 'red_seal_side_photo', 'label': 'Red Seal - Side'},
    {'key': 'back_photo', 'label': 'Back Photo'},
    {'key': 'label_photo', 'label': 'Label Photo'},
    {'key': 'moisture_photo', 'label': 'Moisture Photo'},
    {'key': 'size_front_photo', 'label': 'Size - Front'},
    {'key': 'size_side_photo', 'label': 'Size - Side'},
    {'key': 'inspected_samples_photo', 'label': 'Inspected Samples'},
    {'key': 'metal_checking_photo', 'label': 'Metal Checking'},
]

PHOTO_KEYS = [p['key'] for p in PHOTO_TYPES]
PHOTO_LABELS = {p['key']: p['label'] for p in PHOTO_TYPES}

# Default buyer list, also used to seed the shared customers table
CUSTOMERS = [
    {'name': 'ARSIN RIG', 'code': 'A-01'},
    {'name': 'BENUTA', 'code': 'B-02'},
    {'name': 'CHARLES & HUNT', 'code': 'C-01'},
    {'name': 'DESIGN HOUSE INDIA', 'code': 'D-01'},
    {'name': 'DEPOT', 'code': 'D-02'},
    {'name': 'DOMOTEX GERMANY', 'code': 'D-03'},
    {'name': 'ESSENCE OF KASHMIR', 'code': 'E-01'},
    {'name': 'FABINDIA', 'code': 'F-01'},
    {'name': 'FEIZY', 'code': 'F-02'},
    {'name': 'FLOOR & FURNISHINGS', 'code': 'F-03'},
    {'name': 'GLOBAL VIEWS', 'code': 'G-01'},
    {'name': 'HABITAT', 'code': 'H-01'},
    {'name': 'HOME CENTRE', 'code': 'H-02'},
    {'name': 'HOMEWARE GALLERY', 'code': 'H-03'},
    {'name': 'IMPERIAL KNOTS', 'code': 'I-01'},
    {'name': 'JAIPUR LIVING', 'code': 'J-01'},
    {'name': 'JAIPUR RUGS', 'code': 'J-02'},
    {'name': 'KAPETTO', 'code': 'K-01'},
    {'name': 'KALEEN', 'code': 'K-02'},
    {'name': "KIRAN'S", 'code': 'K-03'},
    {'name': 'LIGNE PURE', 'code': 'L-01'},
    {'name': 'LOLOI', 'code': 'L-02'},
    {'name': 'MASLAND', 'code': 'M-01'},
    {'name': 'MANOR HOUSE', 'code': 'M-02'},
    {'name': 'MILL SILVER', 'code': 'M-03'},
    {'name': 'MOMENI', 'code': 'M-04'},
    {'name': 'NORDIC KNOTS', 'code': 'N-02'},
    {'name': 'NOURISON', 'code': 'N-03'},
    {'name': 'OBEETEE', 'code': 'O-01'},
    {'name': 'ORIENTAL WEAVERS', 'code': 'O-02'},
    {'name': 'POTTERY BARN', 'code': 'P-01'},
    {'name': 'PAPILIO', 'code': 'P-02'},
    {'name': 'PIER 1', 'code': 'P-03'},
    {'name': 'PRIVATE LABEL', 'code': 'P-04'},
    {'name': 'QUADRIFOGLIO', 'code': 'Q-01'},
    {'name': 'RESTORATION HARDWARE', 'code': 'R-01'},
    {'name': 'RIVIERA MAISON', 'code': 'R-02'},
    {'name': 'RUG REPUBLIC', 'code': 'R-03'},
    {'name': 'RUGS USA', 'code': 'R-04'},
    {'name': 'SAFAVIEH', 'code': 'S-01'},
    {'name': 'SARASWATI GLOBAL', 'code': 'S-02'},
    {'name': 'SERENA & LILY', 'code': 'S-03'},
    {'name': 'STARK', 'code': 'S-04'},
    {'name': 'SURYA', 'code': 'S-05'},
    {'name': 'TARGET', 'code': 'T-01'},
    {'name': 'THE RUG COMPANY', 'code': 'T-02'},
    {'name': 'TIBETAN RUGS', 'code': 'T-03'},
    {'name': 'URBAN LADDER', 'code': 'U-01'},
    {'name': 'UTTERMOST', 'code': 'U-02'},
    {'name': 'VIKRAM EXPORTS', 'code': 'V-01'},
    {'name': 'WALMART', 'code': 'W-01'},
    {'name': 'WAYFAIR', 'code': 'W-02'},
    {'name': 'WEST ELM', 'code': 'W-03'},
    {'name': 'WILLIAMS SONOMA', 'code': 'W-04'},
    {'name': 'WORLD MARKET', 'code': 'W-05'},
    {'name': 'ZARA HOME', 'code': 'Z-01'},
    {'name': 'Z GALLERIE', 'code': 'Z-02'},
]

# Option types that accept user-added values
STATIC_OPTIONS = {
    'inspectors': QC_INSPECTORS,
    'merchants': MERCHANTS,
    'buyer_designs': BUYER_DESIGNS,
    'aql_levels': AQL_LEVELS,
    'product_sizes': PRODUCT_SIZES,
}

EMAIL_RECIPIENTS_KEY = 'email_recipients'

# ─── Record fields ───

ORDER_FIELDS = [
    'inspection_date', 'qc_inspector_name', 'customer_name', 'customer_code',
    'customer_po_no', 'ops_no', 'buyer_design_name', 'empl_design_no',
    'color_name', 'product_sizes', 'merchant',
]

QUANTITY_FIELDS = [
    'total_order_qty', 'inspected_lot_qty', 'sample_size', 'accepted_qty', 'rejected_qty',
]

# Two-state checks, grouped by the record section they belong to
PRODUCT_QUALITY_CHECKS = [
    'motif_design_check', 'backing', 'binding_and_edges', 'hand_feel',
    'embossing_carving', 'workmanship', 'product_quality_weight',
]
LABELING_CHECKS = [
    'label_placement', 'side_marking', 'outer_marking', 'inner_pack',
    'care_labels', 'sku_stickers', 'upc_barcodes',
]
PACKAGING_CHECKS = ['carton_drop_test', 'carton_bale_numbering']
ADDITIONAL_CHECKS = ['carton_dimension', 'product_label', 'carton_label', 'barcode_scan']

OK_NOT_OK_FIELDS = PRODUCT_QUALITY_CHECKS + LABELING_CHECKS + PACKAGING_CHECKS + ADDITIONAL_CHECKS
YES_NO_FIELDS = ['approved_sample_available']

PRODUCT_QUALITY_TEXT = [
    'material_fibre_content', 'tuft_density', 'backing_notes', 'pile_height',
    'product_weight', 'size_tolerance', 'finishing_percent', 'packed_percent',
]
PACKAGING_TEXT = [
    'carton_ply', 'packing_type', 'gross_weight', 'net_weight', 'pcs_per_carton_bale',
    'pcs_per_polybag', 'carton_measurement_l', 'carton_measurement_w', 'carton_measurement_h',
]
DEFECT_TRACKING_TEXT = ['dpci_sku_style_number', 'style_description']

REQUIRED_FIELDS = ['company', 'inspection_date', 'aql', 'inspection_result'] + ORDER_FIELDS[1:] + QUANTITY_FIELDS

FIELD_LABELS = {
    'company': 'Company',
    'document_no': 'Document No.',
    'inspection_date': 'Inspection Date',
    'qc_inspector_name': 'Inspector',
    'customer_name': 'Customer',
    'customer_code': 'Customer Code',
    'customer_po_no': 'Customer PO',
    'ops_no': 'OPS No.',
    'buyer_design_name': 'Buyer Design',
    'empl_design_no': 'EMPL Design',
    'color_name': 'Color',
    'product_sizes': 'Product Sizes',
    'merchant': 'Merchant',
    'total_order_qty': 'Total Order Qty',
    'inspected_lot_qty': 'Inspected Lot Qty',
    'aql': 'AQL',
    'sample_size': 'Sample Size',
    'accepted_qty': 'Accepted Qty',
    'rejected_qty': 'Rejected Qty',
    'approved_sample_available': 'Approved Sample Available',
    'material_fibre_content': 'Material/Fibre Content',
    'motif_design_check': 'Motif/Design Check',
    'tuft_density': 'Tuft Density',
    'backing': 'Backing',
    'backing_notes': 'Backing Notes',
    'binding_and_edges': 'Binding/Edges',
    'hand_feel': 'Hand Feel',
    'pile_height': 'Pile Height',
    'embossing_carving': 'Embossing/Carving',
    'workmanship': 'Workmanship',
    'product_quality_weight': 'Product Quality/Weight',
    'product_weight': 'Product Weight',
    'size_tolerance': 'Size Tolerance',
    'finishing_percent': 'Finishing %',
    'packed_percent': 'Packed %',
    'label_placement': 'Label Placement',
    'side_marking': 'Side Marking',
    'outer_marking': 'Outer Marking',
    'inner_pack': 'Inner Pack',
    'care_labels': 'Care Labels',
    'sku_stickers': 'SKU Stickers',
    'upc_barcodes': 'UPC Barcodes',
    'carton_ply': 'Carton Ply',
    'carton_drop_test': 'Carton Drop Test',
    'packing_type': 'Packing Type',
    'gross_weight': 'Gross Weight',
    'net_weight': 'Net Weight',
    'carton_bale_numbering': 'Carton/Bale Numbering',
    'pcs_per_carton_bale': 'Pcs/Carton or Bale',
    'pcs_per_polybag': 'Pcs/Polybag',
    'carton_measurement_l': 'Carton L (cm)',
    'carton_measurement_w': 'Carton W (cm)',
    'carton_measurement_h': 'Carton H (cm)',
    'carton_dimension': 'Carton Dimension',
    'product_label': 'Product Label',
    'carton_label': 'Carton Label',
    'barcode_scan': 'Barcode Scan',
    'dpci_sku_style_number': 'DPCI/SKU/Style No.',
    'style_description': 'Style Description',
    'qc_inspector_remarks': 'QC Inspector Remarks',
    'inspection_result': 'Inspection Result',
}

# Report sections shared by the PDF and the email body, in page order
REPORT_SECTIONS = [
    ('Order Information', ORDER_FIELDS),
    ('Inspection Quantities', ['total_order_qty', 'inspected_lot_qty', 'aql', 'sample_size',
                               'accepted_qty', 'rejected_qty']),
    ('Product Quality', ['approved_sample_available', 'material_fibre_content', 'motif_design_check',
                         'tuft_density', 'backing', 'backing_notes', 'binding_and_edges', 'hand_feel',
                         'pile_height', 'embossing_carving', 'workmanship', 'product_quality_weight',
                         'product_weight', 'size_tolerance', 'finishing_percent', 'packed_percent']),
    ('Labeling & Marking', LABELING_CHECKS),
    ('Packaging', PACKAGING_TEXT[:2] + ['carton_drop_test'] + PACKAGING_TEXT[2:]
     + ['carton_bale_numbering']),
    ('Additional Checks', ADDITIONAL_CHECKS + DEFECT_TRACKING_TEXT),
]
