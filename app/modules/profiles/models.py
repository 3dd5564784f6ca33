# Supabase tables: profiles; storage bucket: resumes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# DDL and RLS policies live in supabase/migrations/

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, default: gen_random_uuid())
- owner_id: uuid (unique, not null, references auth.users.id on delete cascade)
- resume_url: text (nullable) - public URL of the stored resume
- skills: text[] (nullable) - ordered, duplicates allowed
- interests: text[] (nullable) - ordered, duplicates allowed
- experience_level: text (nullable) - intern | entry | mid | senior
- preferred_location: text (nullable)
- bio: text (nullable)
- github_url: text (nullable)
- linkedin_url: text (nullable)
- portfolio_url: text (nullable)
- updated_at: timestamptz (default: now(), refreshed by trigger on update)

RLS: insert/select/update only where auth.uid() = owner_id; no delete policy.

Storage bucket resumes (public):
- object keys: {owner_id}/{unix_millis}.{extension}
- insert/select/update/delete only where auth.uid() matches the first path segment
"""

PROFILES_TABLE = "profiles"
OWNER_COLUMN = "owner_id"

ALLOWED_RESUME_TYPES = [
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]

# PostgREST error code for "no rows" on a .single() query
NO_ROWS_ERROR_CODE = "PGRST116"
