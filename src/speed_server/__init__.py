"""Speed server — command queue between a captive portal and its router."""
