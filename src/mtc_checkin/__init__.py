"""MTC check-in package.

Location-verified attendance check-in for tutors and guest tutors of the
Mohalla Tuition Center program. Organized by feature modules (location,
geocoding, attendance, checkin) with protocol-based gateways so the device
and the REST backend can be swapped out in tests.
"""

__version__ = "0.3.0"
