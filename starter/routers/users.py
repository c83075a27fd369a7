from starter.controllers import users
from starter.router import Router

router = Router()

router.register("GET", "/", users.list_users)
router.register("POST", "/", users.create_user)
router.register("GET", "/:id", users.get_user)
router.register("PUT", "/:id", users.update_user)
router.register("DELETE", "/:id", users.delete_user)
