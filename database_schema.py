"""
SQL schema for the project key-value table and the hosting bucket.
Run these queries in your Supabase SQL editor.
"""

CREATE_PROJECT_KV_TABLE = """
-- Key-value table holding finalized project records
CREATE TABLE IF NOT EXISTS project_kv (
    key TEXT PRIMARY KEY,
    value JSONB NOT NULL,
    created_at TIMESTAMPTZ DEFAULT NOW(),
    updated_at TIMESTAMPTZ DEFAULT NOW()
);

-- Look up a user's projects through the stored owner id
CREATE INDEX IF NOT EXISTS idx_project_kv_owner ON project_kv ((value->>'ownerId'));

-- Enable Row Level Security
ALTER TABLE project_kv ENABLE ROW LEVEL SECURITY;

-- Policy: Users can read their own projects
CREATE POLICY project_kv_select_own ON project_kv
    FOR SELECT
    USING (auth.uid()::text = value->>'ownerId');

-- Policy: Service role can do everything (for API)
CREATE POLICY project_kv_service_role_all ON project_kv
    FOR ALL
    USING (auth.role() = 'service_role');
"""

CREATE_HOSTING_BUCKET = """
-- Public bucket for hosted project images (the API also creates it on demand)
INSERT INTO storage.buckets (id, name, public)
VALUES ('sketchify', 'sketchify', TRUE)
ON CONFLICT (id) DO NOTHING;

-- Policy: Anyone can read hosted project images
CREATE POLICY sketchify_public_read ON storage.objects
    FOR SELECT
    USING (bucket_id = 'sketchify');
"""

CREATE_UPDATED_AT_TRIGGER = """
-- Function to update updated_at timestamp
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = NOW();
    RETURN NEW;
END;
$$ language 'plpgsql';

-- Trigger for project_kv table
DROP TRIGGER IF EXISTS update_project_kv_updated_at ON project_kv;
CREATE TRIGGER update_project_kv_updated_at
    BEFORE UPDATE ON project_kv
    FOR EACH ROW
    EXECUTE FUNCTION update_updated_at_column();
"""

# Combined setup script
FULL_SCHEMA_SETUP = f"""
-- =====================================================
-- Sketchify Schema Setup
-- =====================================================
-- Run this in your Supabase SQL Editor
-- =====================================================

{CREATE_PROJECT_KV_TABLE}

{CREATE_HOSTING_BUCKET}

{CREATE_UPDATED_AT_TRIGGER}

-- =====================================================
-- Setup Complete!
-- =====================================================
"""

if __name__ == "__main__":
    print(FULL_SCHEMA_SETUP)
