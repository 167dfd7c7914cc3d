"""
Tests for the ELD Log Sheet Service.
"""

from datetime import date
from hoslog.services.eld_service import ELDLogService, create_duty_bar
from hoslog.services.hos_service import DailyLog, DailyTotals, DutyStatus, HOSService, LogEntry


class TestCreateDutyBar:
    """Test grid bars for single periods."""

    def test_driving_bar(self):
        bar = create_duty_bar('08:00', '14:00', DutyStatus.DRIVING)

        assert bar.start_slot == 32
        assert bar.duration == 24
        assert bar.status == 'driving'
        assert bar.color == '#FF0000'

    def test_status_colors(self):
        assert create_duty_bar('00:00', '01:00', 'off_duty').color == '#000000'
        assert create_duty_bar('00:00', '01:00', 'sleeper_berth').color == '#000000'
        assert create_duty_bar('00:00', '01:00', 'on_duty').color == '#00FF00'

    def test_unknown_status_is_black(self):
        bar = create_duty_bar('10:00', '10:30', 'yard_move')

        assert bar.color == '#000000'
        assert bar.duration == 2


class TestELDLogService:
    """Test log sheet generation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = ELDLogService()
        self.log = DailyLog(
            date='2024-01-15',
            entries=[
                LogEntry('14:00', '24:00', DutyStatus.OFF_DUTY, 'Rest', 10),
                LogEntry('08:00', '14:00', DutyStatus.DRIVING, 'Route', 6),
            ],
            totals=DailyTotals(driving_hours=6, off_duty_hours=10)
        )

    def test_generate_daily_log(self):
        sheets = self.service.generate_logs([self.log])

        assert len(sheets) == 1
        sheet = sheets[0]
        assert sheet.day_number == 1
        assert sheet.day_of_week == 'Monday'
        assert len(sheet.timeline) == 96
        assert sheet.issues == []
        assert [e.start_time for e in sheet.entries] == ['08:00', '14:00']

    def test_summary_recomputed_from_timeline(self):
        """Test the unlogged morning is counted as off duty."""
        sheet = self.service.generate_logs([self.log])[0]

        assert sheet.summary['driving_hours'] == 6.0
        assert sheet.summary['off_duty_hours'] == 18.0
        assert sheet.summary['total_hours'] == 24.0

    def test_grid_segments_and_transitions(self):
        grid = self.service.generate_logs([self.log])[0].grid_data

        assert [(s['row'], s['start_x'], s['end_x']) for s in grid['segments']] == [
            (1, 0.0, 8.0),
            (3, 8.0, 14.0),
            (1, 14.0, 24.0),
        ]
        assert [(t['x'], t['from_row'], t['to_row']) for t in grid['transitions']] == [
            (8.0, 1, 3),
            (14.0, 3, 1),
        ]
        assert grid['hours'] == list(range(25))
        assert len(grid['rows']) == 4
        assert grid['rows'][3] == {'id': 4, 'label': 'On Duty (Not Driving)', 'short': 'ON'}

    def test_issues_reported(self):
        log = DailyLog(
            date='2024-01-16',
            entries=[
                LogEntry('08:00', '14:00', DutyStatus.DRIVING),
                LogEntry('15:00', '18:00', DutyStatus.ON_DUTY),
            ]
        )

        sheet = self.service.generate_logs([log])[0]

        assert sheet.issues == ['Gap of 60 minutes between 14:00 and 15:00']

    def test_generated_schedule_renders(self):
        """Test every generated day renders to a full 24-hour sheet."""
        daily_logs = HOSService().generate_schedule(30, start_time='06:00', start_date=date(2024, 1, 15))

        sheets = self.service.generate_logs(daily_logs)

        assert [s.day_number for s in sheets] == list(range(1, len(daily_logs) + 1))
        for sheet in sheets:
            assert sheet.summary['total_hours'] == 24.0
            assert sheet.summary['driving_hours'] <= 11.0

    def test_json_output(self):
        json_logs = self.service.generate_logs_json([self.log])

        assert isinstance(json_logs, list)
        log = json_logs[0]
        assert log['date'] == '2024-01-15'
        assert log['timeline'][32] == 'driving'
        assert log['timeline'][0] == 'off_duty'
        assert log['entries'][0]['status'] == 'driving'
        assert log['duty_bars'][0]['color'] == '#000000'
        assert 'grid_data' in log

    def test_missing_date(self):
        sheet = self.service.generate_logs([DailyLog(date='')])[0]

        assert sheet.day_of_week == ''
        assert sheet.summary['off_duty_hours'] == 24.0

    def test_render_entries(self):
        result = self.service.render_entries([
            LogEntry('08:00', '15:00', DutyStatus.DRIVING),
            LogEntry('14:00', '18:00', DutyStatus.ON_DUTY),
        ])

        assert result['timeline'][55] == 'driving'
        assert result['timeline'][56] == 'on_duty'
        assert result['totals'] == {
            'driving_hours': 6.0,
            'on_duty_hours': 4.0,
            'off_duty_hours': 14.0,
            'sleeper_berth_hours': 0.0,
        }
        assert result['issues'] == ['Overlap of 60 minutes between 15:00 and 14:00']
        assert len(result['duty_bars']) == 2
