# wsgi.py
from bulkads import create_app

application = create_app()
app = application
