from pincode_api.contracts.pincode import LocationRecord, PincodeTable


def lookup(table: PincodeTable, pincode: str) -> LocationRecord | None:
    # Exact key match, no normalization.
    return table.get(pincode)
