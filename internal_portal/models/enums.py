"""
Enumerations shared by models, schemas and validators.
"""

import enum


class ApiEnv(str, enum.Enum):
    """Platform API environment a Registered Organization is granted."""

    sandbox = "sandbox"
    production = "production"


class FhirEndpointStatus(str, enum.Enum):
    """FHIR Endpoint.status value set."""

    active = "active"
    suspended = "suspended"
    error = "error"
    off = "off"
    entered_in_error = "entered-in-error"
    test = "test"


class OrganizationType(str, enum.Enum):
    """Classification used for organizations and for scoping user searches."""

    primary_care_clinic = "primary_care_clinic"
    speciality_clinic = "speciality_clinic"
    multispecialty_clinic = "multispecialty_clinic"
    inpatient_facility = "inpatient_facility"
    emergency_room = "emergency_room"
    urgent_care = "urgent_care"
    academic_facility = "academic_facility"
    health_it_vendor = "health_it_vendor"
    accountable_care_organization = "accountable_care_organization"


API_ENVS = frozenset(e.value for e in ApiEnv)
FHIR_ENDPOINT_STATUSES = frozenset(s.value for s in FhirEndpointStatus)
ORGANIZATION_TYPES = frozenset(t.value for t in OrganizationType)

US_STATES: dict[str, str] = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AS": "American Samoa",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "DC": "District of Columbia",
    "FL": "Florida",
    "GA": "Georgia",
    "GU": "Guam",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "MP": "Northern Mariana Islands",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "PR": "Puerto Rico",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VI": "U.S. Virgin Islands",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
}
