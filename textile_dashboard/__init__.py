"""
Textile Mill Dashboard

Analytics backend for a textile mill: production data entry for the
knitting, dyeing and garments departments, a combined dashboard over
inventory, orders, recipes and production, and a shared book library.

To connect a database:
    Set SUPABASE_URL and SUPABASE_KEY (or put them in .env) and create the
    tables in supabase_schema.sql. Without credentials the app runs on
    simulated data from textile_dashboard.simulator.

To connect to Streamlit/Dash:
    Call dashboard.load_comprehensive_dashboard(store, account_id) for the
    card and chart data, or dashboard.load_production_analytics(...) for a
    single department.

To add a production department:
    Add an entry to config.PRODUCTION_TYPES naming its collection, quantity
    and target fields and distribution field, then add its variant to
    models.parse_production_entry.
"""
