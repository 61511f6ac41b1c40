from django.contrib.auth import get_user_model
from django.test import RequestFactory, TestCase

from .models import User
from .permissions import RolePermission, trade_permissions


class UserModelTests(TestCase):
	def test_email_is_normalised(self):
		user = get_user_model().objects.create_user(email="Exec@Example.COM", password="x")
		self.assertEqual(user.email, "exec@example.com")
		self.assertEqual(user.role, User.Role.EXECUTIVE)
		self.assertFalse(user.can_approve)

	def test_superuser_defaults_to_owner(self):
		user = get_user_model().objects.create_superuser(email="root@example.com", password="x")
		self.assertEqual(user.role, User.Role.OWNER)
		self.assertTrue(user.can_approve)

	def test_admin_can_approve(self):
		user = get_user_model().objects.create_user(email="admin@example.com", password="x", role=User.Role.ADMIN)
		self.assertTrue(user.can_approve)

	def test_approvers(self):
		manager = get_user_model().objects
		admin = manager.create_user(email="admin@example.com", password="x", role=User.Role.ADMIN)
		manager.create_user(email="exec@example.com", password="x")
		manager.create_user(email="gone@example.com", password="x", role=User.Role.OWNER, is_active=False)
		root = manager.create_superuser(email="root@example.com", password="x", role=User.Role.VIEWER)
		self.assertEqual(set(manager.approvers()), {admin, root})

	def test_superuser_flags_are_enforced(self):
		with self.assertRaises(ValueError):
			get_user_model().objects.create_superuser(email="root@example.com", password="x", is_staff=False)


class RolePermissionTests(TestCase):
	def setUp(self):
		self.factory = RequestFactory()
		self.viewer = get_user_model().objects.create_user(email="viewer@example.com", password="x", role=User.Role.VIEWER)
		self.executive = get_user_model().objects.create_user(email="exec@example.com", password="x", role=User.Role.EXECUTIVE)

	def _allowed(self, perms, user, method="get"):
		request = getattr(self.factory, method)("/")
		request.user = user
		return all(p.has_permission(request, None) for p in perms)

	def test_viewer_reads_only(self):
		perms = trade_permissions("list")
		self.assertTrue(self._allowed(perms, self.viewer))
		self.assertFalse(self._allowed(perms, self.viewer, "post"))

	def test_executive_cannot_approve(self):
		self.assertTrue(self._allowed(trade_permissions("submit"), self.executive, "post"))
		self.assertFalse(self._allowed(trade_permissions("approve"), self.executive, "post"))
		self.assertFalse(self._allowed(trade_permissions("file"), self.executive, "post"))

	def test_role_permission_sets(self):
		perm = RolePermission(allow_read={User.Role.VIEWER})
		self.assertTrue(self._allowed([perm], self.viewer))
		self.assertFalse(self._allowed([perm], self.executive))
