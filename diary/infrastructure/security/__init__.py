"""Security primitives: field encryption and Azure AD token validation."""
