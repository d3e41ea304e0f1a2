"""
Two-line rendering of a reverse-geocoded address.
"""
from current_location.models.location import Address


def format_address(address: Address) -> str:
    """
    Render *address* as "house street" over "city postcode".

    The second line falls back to the administrative area when no
    locality is known. Missing or empty components are left out; no
    locale-aware formatting is applied.
    """
    line1 = ""
    if address.house_number:
        line1 += address.house_number + " "
    if address.street:
        line1 += address.street

    line2 = ""
    if address.locality:
        line2 += address.locality + " "
    elif address.admin_area:
        line2 += address.admin_area + " "
    if address.postal_code:
        line2 += address.postal_code

    return line1 + "\n" + line2
