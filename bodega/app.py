# module bodega.app
from bodega.app_setup.factory import create_app

# App globale
app = create_app()
