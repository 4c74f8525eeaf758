from compliance_feed.main import create_app

app = create_app()
