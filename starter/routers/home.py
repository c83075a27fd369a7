from starter.controllers import home
from starter.router import Router

router = Router()

router.register("GET", "/", home.welcome)
