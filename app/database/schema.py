"""Idempotent DDL for the record store tables."""

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS document_analysis (
        id SERIAL PRIMARY KEY,
        document_id VARCHAR(255) UNIQUE NOT NULL,
        document_type VARCHAR(100) NOT NULL,
        employee_id VARCHAR(100),
        department VARCHAR(100),
        analysis_timestamp TIMESTAMPTZ NOT NULL,
        is_valid BOOLEAN,
        validity_status VARCHAR(50) NOT NULL,
        compliance_status VARCHAR(50),
        risk_level VARCHAR(20),
        expiry_date DATE,
        issue_date DATE,
        days_until_expiry INTEGER,
        is_expired BOOLEAN DEFAULT false,
        is_expiring_soon BOOLEAN DEFAULT false,
        data_consistency VARCHAR(50),
        missing_information JSONB,
        data_quality_issues JSONB,
        compliance_issues JSONB,
        recommendations JSONB,
        priority VARCHAR(20),
        confidence_score INTEGER,
        data_completeness INTEGER,
        ocr_confidence DECIMAL(3,2),
        requires_manual_review BOOLEAN DEFAULT false,
        verification_required BOOLEAN DEFAULT false,
        document_score INTEGER,
        raw_analysis TEXT,
        provider VARCHAR(50),
        degraded BOOLEAN DEFAULT false,
        processing_status VARCHAR(20) DEFAULT 'completed',
        created_at TIMESTAMPTZ DEFAULT NOW(),
        updated_at TIMESTAMPTZ DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ocr_metadata (
        id SERIAL PRIMARY KEY,
        document_id VARCHAR(255) NOT NULL,
        document_type VARCHAR(100) NOT NULL,
        extracted_text TEXT,
        confidence DECIMAL(3,2),
        pages INTEGER,
        extracted_fields JSONB,
        tables JSONB,
        provider VARCHAR(50),
        language VARCHAR(10),
        degraded BOOLEAN DEFAULT false,
        processed_at TIMESTAMPTZ,
        created_at TIMESTAMPTZ DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sync_jobs (
        id SERIAL PRIMARY KEY,
        job_id VARCHAR(255) UNIQUE NOT NULL,
        job_type VARCHAR(50) NOT NULL,
        status VARCHAR(20) NOT NULL,
        started_at TIMESTAMPTZ,
        completed_at TIMESTAMPTZ,
        documents_processed INTEGER DEFAULT 0,
        documents_failed INTEGER DEFAULT 0,
        documents_degraded INTEGER DEFAULT 0,
        last_sync_timestamp TIMESTAMPTZ,
        error_message TEXT,
        created_at TIMESTAMPTZ DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS job_execution_log (
        id SERIAL PRIMARY KEY,
        job_name VARCHAR(100) NOT NULL,
        job_id VARCHAR(255) NOT NULL,
        status VARCHAR(20) NOT NULL,
        executed_at TIMESTAMPTZ NOT NULL,
        duration_ms INTEGER,
        result JSONB,
        error_message TEXT
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_document_analysis_type ON document_analysis(document_type)",
    "CREATE INDEX IF NOT EXISTS idx_document_analysis_status ON document_analysis(validity_status)",
    "CREATE INDEX IF NOT EXISTS idx_document_analysis_expiry ON document_analysis(expiry_date)",
    "CREATE INDEX IF NOT EXISTS idx_ocr_metadata_document_id ON ocr_metadata(document_id)",
    "CREATE INDEX IF NOT EXISTS idx_sync_jobs_status ON sync_jobs(status)",
    "CREATE INDEX IF NOT EXISTS idx_job_execution_log_name ON job_execution_log(job_name, executed_at)",
)
