"""
ActiveCampaign field mappings - maps the keys posted by the quote form to the titles of the custom fields in
ActiveCampaign.

The numeric field IDs are looked up from these titles at runtime (see fields.py) unless they're pinned with the
AC_FIELD_IDS setting, e.g. AC_FIELD_IDS='{"garmentType": "123"}'.
"""

# Quote form key -> ActiveCampaign custom field title, in the order the values are sent
QUOTE_FIELD_TITLES = {
    'garmentType': 'Garment Type',
    'garmentColor': 'Garment Color',
    'garmentQuality': 'Garment Quality',
    'garmentSource': 'Garment Source',
    'printType': 'Print Type',
    'screenColors': 'Screen Color Count',
    'stitches': 'Embroidery Stitch Count',
    'printSize': 'Print Size',
    'artW': 'Artwork Width (in)',
    'artH': 'Artwork Height (in)',
    'locations': 'Print Locations',
    'rushFee': 'Rush Fee',
    'ship_pickup': 'Pickup or Shipping',
    'tax_exempt': 'Tax Exempt',
    'notes': 'Project Notes',
}

TOTALS_FIELD_TITLES = {
    'total_per': 'Quote – Per Shirt',
    'total_sub': 'Quote – Subtotal',
    'total_tax': 'Quote – Tax',
    'total_total': 'Quote – Total',
}

# Field key -> attribute of the `totals` object posted with the quote
TOTALS_FIELD_SOURCES = {
    'total_per': 'per',
    'total_sub': 'sub',
    'total_tax': 'tax',
    'total_total': 'total',
}

AC_FIELD_TITLES = {**QUOTE_FIELD_TITLES, **TOTALS_FIELD_TITLES}
