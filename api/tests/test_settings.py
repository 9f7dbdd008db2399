from django.urls import reverse
from rest_framework import status

from ..models import PermissionType, RobotSetting
from .base import BaseAPITestCase


class RobotSettingsAPITests(BaseAPITestCase):

    def setUp(self):
        super().setUp()
        self.owner = self._create_user('owner@example.com')
        self.guest = self._create_user('guest@example.com')
        self.stranger = self._create_user('stranger@example.com')
        self.robot = self._create_robot('SN-1', self.owner)
        self._grant(self.guest, self.robot, PermissionType.USAGE)
        self.url = reverse('api:robot-settings', args=['SN-1'])

    def test_get_before_save_returns_empty_settings(self):
        self._auth_as(self.guest)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'settings': {}})

    def test_save_then_get(self):
        self._auth_as(self.guest)
        payload = {'speed': 5, 'mode': 'eco', 'zones': [1, 2]}

        response = self.client.post(self.url, {'settings': payload}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['settings'], payload)
        self.assertEqual(response.data['userId'], self.guest.id)
        self.assertEqual(response.data['robotId'], self.robot.id)

        response = self.client.get(self.url)
        self.assertEqual(response.data['settings'], payload)

    def test_save_replaces_previous_settings(self):
        self._auth_as(self.guest)
        self.client.post(self.url, {'settings': {'speed': 5, 'mode': 'eco'}}, format='json')
        self.client.post(self.url, {'settings': {'speed': 1}}, format='json')

        self.assertEqual(RobotSetting.objects.filter(user=self.guest, robot=self.robot).count(), 1)
        self.assertEqual(self.client.get(self.url).data['settings'], {'speed': 1})

    def test_settings_are_per_user(self):
        self._auth_as(self.guest)
        self.client.post(self.url, {'settings': {'speed': 5}}, format='json')

        self._auth_as(self.owner)
        self.assertEqual(self.client.get(self.url).data, {'settings': {}})

    def test_save_requires_settings(self):
        self._auth_as(self.guest)
        response = self.client.post(self.url, {}, format='json')
        self._assert_error_response(response, status.HTTP_400_BAD_REQUEST, "Settings are required")

    def test_save_rejects_falsy_scalar_settings(self):
        self._auth_as(self.guest)
        for payload in ('', False, 0):
            with self.subTest(payload=payload):
                response = self.client.post(self.url, {'settings': payload}, format='json')
                self._assert_error_response(response, status.HTTP_400_BAD_REQUEST, "Settings are required")
        self.assertFalse(RobotSetting.objects.filter(user=self.guest).exists())

    def test_save_accepts_empty_object(self):
        self._auth_as(self.guest)
        response = self.client.post(self.url, {'settings': {}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['settings'], {})

    def test_stranger_cannot_read_or_write(self):
        self._auth_as(self.stranger)
        self._assert_error_response(self.client.get(self.url), status.HTTP_403_FORBIDDEN)
        self._assert_error_response(self.client.post(self.url, {'settings': {}}, format='json'),
                                    status.HTTP_403_FORBIDDEN)
        self.assertFalse(RobotSetting.objects.filter(user=self.stranger).exists())

    def test_missing_robot(self):
        self._auth_as(self.guest)
        response = self.client.get(reverse('api:robot-settings', args=['SN-NOPE']))
        self._assert_error_response(response, status.HTTP_404_NOT_FOUND, "Robot not found")

    def test_list_settings_includes_robot_summary(self):
        other = self._create_robot('SN-2', self.guest)
        RobotSetting.objects.create(user=self.guest, robot=self.robot, raw_settings='{"a": 1}')
        RobotSetting.objects.create(user=self.guest, robot=other, raw_settings='{"b": 2}')
        RobotSetting.objects.create(user=self.owner, robot=self.robot, raw_settings='{"c": 3}')

        self._auth_as(self.guest)
        response = self.client.get(reverse('api:settings-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        by_serial = {row['robot']['serialNumber']: row['settings'] for row in response.data}
        self.assertEqual(by_serial, {'SN-1': {'a': 1}, 'SN-2': {'b': 2}})

    def test_settings_survive_access_loss_but_are_unreachable(self):
        self._auth_as(self.guest)
        self.client.post(self.url, {'settings': {'speed': 5}}, format='json')
        self.robot.permissions.filter(user=self.guest).delete()

        self._assert_error_response(self.client.get(self.url), status.HTTP_403_FORBIDDEN)
        self.assertEqual(len(self.client.get(reverse('api:settings-list')).data), 1)
