"""
Flight-region tables used by the travel-time estimator.

Airports are grouped into coarse flight regions, and each ordered region pair has an
average direct flight time in hours. Real flights vary a lot; the numbers are only meant
to separate "short hop" from "long haul" for reachability scoring.

Keep these tables centralized so the estimator, the quality report and scripts agree.
"""

from __future__ import annotations

FLIGHT_REGIONS: tuple[str, ...] = (
    "north_america_east",
    "north_america_central",
    "north_america_west",
    "caribbean",
    "central_america",
    "south_america_north",
    "south_america_south",
    "western_europe",
    "southern_europe",
    "northern_europe",
    "eastern_europe",
    "middle_east",
    "south_asia",
    "southeast_asia",
    "east_asia",
    "oceania",
    "east_africa",
    "west_africa",
    "southern_africa",
    "north_africa",
)

AIRPORTS_BY_FLIGHT_REGION: dict[str, tuple[str, ...]] = {
    "north_america_east": (
        "JFK", "EWR", "LGA", "BOS", "PHL", "DCA", "IAD", "BWI", "ATL", "MIA", "FLL", "MCO", "TPA",
        "CLT", "RDU", "PIT", "CLE", "DTW", "BUF", "YYZ", "YUL", "YOW", "YHZ", "YQB", "BNA", "MEM",
        "IND", "MKE", "SDF", "SAV", "CHS", "EYW", "ACK", "MVY", "PBI", "JAX", "STL",
    ),
    "north_america_central": (
        "ORD", "MSP", "DFW", "IAH", "SAT", "AUS", "OKC", "MCI", "MSY", "SLC", "DEN", "ABQ", "ELP",
        "YYC", "YEG",
    ),
    "north_america_west": (
        "LAX", "SFO", "SAN", "SEA", "PDX", "LAS", "PHX", "SJC", "OAK", "SMF", "YVR", "ANC", "HNL",
        "OGG", "PSP", "SBA", "MRY", "STS", "BOI", "RNO", "TUS", "ASE", "JAC", "YYJ", "YLW",
    ),
    "caribbean": (
        "SJU", "NAS", "PUJ", "SDQ", "MBJ", "KIN", "AUA", "CUR", "BON", "SXM", "PLS", "GCM", "SBH",
        "UVF", "SKB", "GND", "PTP", "FDF", "RTB", "BZE", "TZA", "STT", "STX",
    ),
    "central_america": (
        "MEX", "CUN", "GDL", "SJO", "PTY", "GUA", "PVR", "SJD", "OAX", "MID", "BJX", "ZIH", "LIR",
        "SAL",
    ),
    "south_america_north": (
        "BOG", "MDE", "CTG", "CLO", "UIO", "GYE", "LIM", "CUZ", "GIG", "GRU", "CCS", "SSA", "FLN",
        "GPS",
    ),
    "south_america_south": (
        "EZE", "SCL", "MVD", "MDZ", "IGR", "BRC", "USH", "PUQ", "AEP", "SLA", "PMC", "PDP", "LPB",
        "VVI", "UYU",
    ),
    "western_europe": (
        "LHR", "LGW", "STN", "CDG", "ORY", "AMS", "FRA", "MUC", "ZRH", "BRU", "DUS", "HAM", "BER",
        "CGN", "STR", "NUE", "LEJ", "DRS", "GVA", "BSL", "LUX", "DUB", "SNN", "BHX", "MAN", "EDI",
        "GLA", "BRS", "CWL", "BFS", "LPL", "INV", "SOU", "BHD", "ORK", "KNO", "INN", "SZG", "GRZ",
        "VIE", "HAJ", "BRE",
    ),
    "southern_europe": (
        "BCN", "MAD", "AGP", "VLC", "SVQ", "BIO", "IBZ", "PMI", "TFS", "LPA", "ACE", "FUE", "FCO",
        "MXP", "VCE", "NAP", "FLR", "BLQ", "CTA", "PMO", "TRN", "BGY", "PSA", "VRN", "OLB", "CAG",
        "GOA", "LIS", "OPO", "FAO", "FNC", "PDL", "ATH", "SKG", "JMK", "JTR", "HER", "RHO", "EFL",
        "CFU", "CHQ", "ZTH", "PXO", "JNX", "MCM", "NCE", "MRS", "TLS", "BOD", "NTE", "LYS", "SXB",
        "AJA", "MLH", "LIL", "MLA", "PFO", "LCA",
    ),
    "northern_europe": (
        "CPH", "ARN", "GOT", "OSL", "BGO", "TOS", "TRD", "HEL", "RVN", "KEF", "MMA", "AAR", "SVG",
        "LYR", "BOO",
    ),
    "eastern_europe": (
        "WAW", "KRK", "GDN", "WRO", "PRG", "BUD", "OTP", "SOF", "PDV", "BEG", "ZAG", "SPU", "DBV",
        "LJU", "TIA", "SJJ", "OMO", "RIX", "TLL", "VNO", "BTS", "KSC", "PLQ", "IST", "AYT",
    ),
    "middle_east": (
        "DXB", "AUH", "DOH", "BAH", "KWI", "MCT", "SLL", "RUH", "JED", "MED", "ALA", "TLV", "AMM",
        "BEY", "AQJ",
    ),
    "south_asia": (
        "DEL", "BOM", "BLR", "MAA", "CCU", "COK", "GOI", "JAI", "AMD", "ATQ", "UDR", "KTM", "PKR",
        "CMB", "HRI", "PBH",
    ),
    "southeast_asia": (
        "SIN", "BKK", "DMK", "KUL", "PEN", "LGK", "CGK", "DPS", "JOG", "MNL", "CEB", "PPS", "HAN",
        "SGN", "DAD", "CXR", "HUI", "CNX", "HKT", "USM", "KBV", "REP", "LPQ", "RGN", "BWN", "VTE",
        "BKI", "JHB",
    ),
    "east_asia": (
        "NRT", "HND", "KIX", "ICN", "GMP", "CJU", "PUS", "PEK", "PVG", "CAN", "SZX", "CTU", "HGH",
        "XIY", "KWL", "NKG", "SHE", "WUH", "CSX", "DLC", "LJG", "HKG", "MFM", "TPE", "KHH", "ULN",
        "NGO", "FUK", "CTS", "OKA", "HIJ", "KMJ",
    ),
    "oceania": (
        "SYD", "MEL", "BNE", "PER", "ADL", "CNS", "OOL", "HBA", "LST", "AKL", "ZQN", "WLG", "CHC",
        "ROT", "NAN", "APW", "RAR", "PPT", "BOB", "NOU", "VLI", "ROR", "GUM",
    ),
    "east_africa": ("NBO", "DAR", "ADD", "EBB", "KGL", "ZNZ", "JRO", "SEZ", "MRU", "RUN"),
    "west_africa": ("ACC", "DSS", "LOS", "ABV", "CMN", "RAK", "FEZ", "ESU", "TNG", "TUN"),
    "southern_africa": ("JNB", "CPT", "DUR", "WDH", "VFA", "LVI", "MQP", "HRE"),
    "north_africa": ("CAI", "LXR", "HRG", "SSH", "ALG"),
}

AIRPORT_TO_FLIGHT_REGION: dict[str, str] = {
    code: region for region, codes in AIRPORTS_BY_FLIGHT_REGION.items() for code in codes
}

# Fallback when a catalog airport is missing from the table above.
CATALOG_REGION_TO_FLIGHT_REGION: dict[str, str] = {
    "europe": "western_europe",
    "asia": "southeast_asia",
    "americas": "north_america_east",
    "africa": "east_africa",
    "oceania": "oceania",
    "middle_east": "middle_east",
    "caribbean": "caribbean",
}

# Rows and columns follow FLIGHT_REGIONS order.
_FLIGHT_HOURS_MATRIX: tuple[tuple[float, ...], ...] = (
    (2, 3, 5, 3, 4, 6, 10, 7, 8, 8, 9, 11, 14, 17, 14, 20, 15, 8, 16, 10),
    (3, 2, 3.5, 4, 3.5, 6, 10, 9, 10, 9, 10, 13, 15, 17, 13, 18, 16, 10, 17, 11),
    (5, 3.5, 2, 6, 5, 8, 12, 10, 11, 10, 11, 15, 16, 16, 11, 13, 18, 12, 18, 12),
    (3, 4, 6, 1.5, 3, 4, 9, 8, 9, 9, 10, 13, 16, 19, 16, 20, 14, 8, 15, 10),
    (4, 3.5, 5, 3, 2, 4, 9, 10, 11, 11, 12, 15, 17, 19, 14, 18, 16, 10, 17, 12),
    (6, 6, 8, 4, 4, 3, 5, 10, 11, 12, 12, 14, 17, 20, 18, 18, 14, 8, 12, 11),
    (10, 10, 12, 9, 9, 5, 3, 12, 13, 14, 14, 16, 18, 22, 20, 14, 14, 10, 10, 13),
    (7, 9, 10, 8, 10, 10, 12, 1.5, 2, 2, 2.5, 5, 8, 11, 10, 20, 8, 5, 11, 3),
    (8, 10, 11, 9, 11, 11, 13, 2, 1.5, 3, 2, 4.5, 7, 10, 11, 20, 7, 4, 10, 2.5),
    (8, 9, 10, 9, 11, 12, 14, 2, 3, 1.5, 2, 6, 9, 11, 10, 21, 9, 6, 12, 4),
    (9, 10, 11, 10, 12, 12, 14, 2.5, 2, 2, 1.5, 4, 7, 9, 9, 19, 7, 6, 10, 3),
    (11, 13, 15, 13, 15, 14, 16, 5, 4.5, 6, 4, 2, 4, 7, 9, 14, 5, 7, 8, 4),
    (14, 15, 16, 16, 17, 17, 18, 8, 7, 9, 7, 4, 2, 4, 7, 12, 6, 9, 9, 6),
    (17, 17, 16, 19, 19, 20, 22, 11, 10, 11, 9, 7, 4, 2, 5, 8, 9, 13, 11, 10),
    (14, 13, 11, 16, 14, 18, 20, 10, 11, 10, 9, 9, 7, 5, 2.5, 10, 12, 14, 14, 11),
    (20, 18, 13, 20, 18, 18, 14, 20, 20, 21, 19, 14, 12, 8, 10, 3, 14, 18, 12, 18),
    (15, 16, 18, 14, 16, 14, 14, 8, 7, 9, 7, 5, 6, 9, 12, 14, 2, 6, 4, 5),
    (8, 10, 12, 8, 10, 8, 10, 5, 4, 6, 6, 7, 9, 13, 14, 18, 6, 2, 8, 3),
    (16, 17, 18, 15, 17, 12, 10, 11, 10, 12, 10, 8, 9, 11, 14, 12, 4, 8, 2, 8),
    (10, 11, 12, 10, 12, 11, 13, 3, 2.5, 4, 3, 4, 6, 10, 11, 18, 5, 3, 8, 1.5),
)

REGION_FLIGHT_HOURS: dict[tuple[str, str], float] = {
    (origin, dest): float(hours)
    for origin, row in zip(FLIGHT_REGIONS, _FLIGHT_HOURS_MATRIX)
    for dest, hours in zip(FLIGHT_REGIONS, row)
}


def flight_region_for(airport_code: str | None, catalog_region: str | None = None) -> str | None:
    """Map an airport (or, failing that, a catalog region) to a flight region."""
    if airport_code:
        region = AIRPORT_TO_FLIGHT_REGION.get(airport_code.strip().upper())
        if region:
            return region
    if catalog_region:
        return CATALOG_REGION_TO_FLIGHT_REGION.get(catalog_region)
    return None


def flight_hours_between(origin_region: str, dest_region: str, *, default: float = 10.0) -> float:
    """Average direct flight hours between two regions (reverse pair, then long-haul default)."""
    hours = REGION_FLIGHT_HOURS.get((origin_region, dest_region))
    if hours is None:
        hours = REGION_FLIGHT_HOURS.get((dest_region, origin_region))
    return default if hours is None else hours
