"""Internal constants shared across the library."""

USER_AGENT = "pyhotel/1"

# ------------------------------------------------------------------
# Tables
# ------------------------------------------------------------------

ROOMS_TABLE = "rooms"
GUESTS_TABLE = "guests"
BOOKINGS_TABLE = "bookings"
PAYMENTS_TABLE = "payments"

# ------------------------------------------------------------------
# Read shapes (PostgREST ``select=`` with embedded relations).
# Writes request the same shape so returned rows match mirrored rows.
# ------------------------------------------------------------------

SELECT_ALL = "*"
BOOKING_SELECT = "*,guests(id,name,email,phone),rooms(id,number,type,status,rate)"
PAYMENT_SELECT = "*,bookings(id,check_in,check_out,total_amount,guests(name,email),rooms(number,type))"

# ------------------------------------------------------------------
# Remote procedures
# ------------------------------------------------------------------

CHECK_AVAILABILITY_PROCEDURE = "check_room_availability"
CALCULATE_TOTAL_PROCEDURE = "calculate_booking_total"

# PostgREST: JWT/role not configured for the requested resource.
NOT_CONFIGURED_CODE = "PGRST301"
