"""Checks on the SQL migrations that the service relies on"""
import re
from pathlib import Path

MIGRATIONS = Path(__file__).resolve().parent.parent / "supabase" / "migrations"


def read(name):
    return (MIGRATIONS / name).read_text()


def test_owner_id_is_unique_so_upsert_and_lookup_hit_one_row():
    sql = read("001_create_profiles_table.sql")
    assert re.search(r"owner_id UUID UNIQUE NOT NULL", sql)


def test_profiles_have_no_delete_policy():
    sql = read("001_create_profiles_table.sql")
    policies = re.findall(r"FOR (INSERT|SELECT|UPDATE|DELETE)", sql)
    assert sorted(policies) == ["INSERT", "SELECT", "UPDATE"]


def test_updated_at_trigger_runs_on_insert_and_update():
    sql = read("001_create_profiles_table.sql")
    assert "BEFORE INSERT OR UPDATE ON profiles" in sql


def test_resume_policies_scope_to_first_path_segment():
    sql = read("002_create_resumes_storage.sql")
    assert sql.count("(storage.foldername(name))[1]") >= 4
