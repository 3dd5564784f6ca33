# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User login and session management
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Resolve the identity behind a JWT
- auth.sign_out() - Invalidate the session

The identity id (auth.users.id) is the owner key for profiles rows
and the first path segment of every object in the resumes bucket.
"""
