from unittest.mock import MagicMock

import pytest

from humclient.errors import ApiError
from humclient.uploads import (
    MB, FileInput, ImageUploader, LocalFile, ObjectUploader, VideoUploader, normalize_upload_url,
)

from .conftest import make_response


def _video(size=5 * MB, content_type='video/mp4'):
    return LocalFile('hero.mp4', content_type, b'\x00' * 16, declared_size=size)


# ==========================================
# VIDEO HERO
# ==========================================
@pytest.fixture
def completed():
    return []


@pytest.fixture
def video_uploader(client, notifier, completed):
    return VideoUploader(client, 'hero', notifier, on_complete=completed.append)


def test_video_too_large_makes_no_request(video_uploader, http_session, notifier, completed):
    file_input = FileInput([_video(size=250 * MB)])

    outcome = video_uploader.handle_select(file_input)

    assert outcome == {'success': False}
    assert completed == [{'success': False}]
    assert http_session.request.call_count == 0
    assert notifier.shown[0].title == 'File quá lớn'
    assert '200MB' in notifier.shown[0].description
    assert file_input.files == [] and file_input.reset_count == 1


def test_non_video_makes_no_request(video_uploader, http_session, notifier):
    video_uploader.handle_select(FileInput([LocalFile('anh.png', 'image/png', b'png')]))

    assert http_session.request.call_count == 0
    assert notifier.shown[0].title == 'Định dạng file không hợp lệ'


def test_valid_video_uploads_then_registers(video_uploader, http_session, notifier, completed):
    http_session.request.side_effect = [
        make_response(200, {'url': '/api/assets/abc.mp4'}),
        make_response(200, {
            'success': True, 'videoType': 'hero', 'videoUrl': '/api/assets/abc.mp4',
            'fileName': 'hero.landingpage.mp4', 'message': 'Đang chờ lưu',
        }),
    ]
    file_input = FileInput([_video()])

    video_uploader.handle_select(file_input)

    calls = http_session.request.call_args_list
    assert len(calls) == 2
    assert calls[0].args == ('POST', 'http://hum.test/api/upload-hero-video')
    assert 'video' in calls[0].kwargs['files']
    assert calls[1].args == ('POST', 'http://hum.test/api/save-hero-video')
    assert calls[1].kwargs['json'] == {'videoUrl': '/api/assets/abc.mp4', 'videoType': 'hero'}
    assert completed == [{'success': True, 'fileName': 'hero.landingpage.mp4', 'message': 'Đang chờ lưu'}]
    assert notifier.shown[0].title == 'Video đã được tải lên!'
    assert file_input.reset_count == 1


def test_register_failure_does_not_reupload(video_uploader, http_session, notifier, completed):
    http_session.request.side_effect = [
        make_response(200, {'url': '/api/assets/abc.mp4'}),
        make_response(500, {'message': 'DB down'}),
    ]
    file_input = FileInput([_video()])

    video_uploader.handle_select(file_input)

    assert http_session.request.call_count == 2
    assert completed == [{'success': False}]
    assert notifier.shown[0].title == 'Lỗi tải lên'
    assert notifier.shown[0].description == 'DB down'
    assert file_input.reset_count == 1


def test_upload_error_message_from_server(video_uploader, http_session, notifier, completed):
    http_session.request.return_value = make_response(400, {'error': 'Only video files are allowed (mp4, webm, ogg)'})

    video_uploader.handle_select(FileInput([_video(content_type='video/quicktime')]))

    assert http_session.request.call_count == 1
    assert completed == [{'success': False}]
    assert 'mp4' in notifier.shown[0].description


def test_custom_ceiling(client, notifier, http_session):
    uploader = VideoUploader(client, 'reservation', notifier, max_file_size=10 * MB)
    assert uploader.handle_select(FileInput([_video(size=11 * MB)])) == {'success': False}
    assert http_session.request.call_count == 0


def test_empty_selection_does_nothing(video_uploader, completed):
    assert video_uploader.handle_select(FileInput()) is None
    assert completed == []


def test_unknown_slot():
    with pytest.raises(ValueError):
        VideoUploader(MagicMock(), 'footer', MagicMock())


# ==========================================
# UPLOAD QUA URL KÝ SẴN
# ==========================================
@pytest.fixture
def put_session():
    session = MagicMock()
    session.request.return_value = make_response(200, {'url': '/api/assets/x.png'})
    return session


def _params():
    return {'method': 'PUT', 'url': 'http://hum.test/api/objects/put/tok123?sig=abc'}


def test_object_uploader_puts_raw_bytes(put_session, notifier):
    results, progress = [], []
    uploader = ObjectUploader(
        _params, notifier, session=put_session, max_files=2,
        on_complete=results.append, on_progress=lambda done, total: progress.append((done, total)),
    )
    files = [LocalFile('a.png', 'image/png', b'aaa'), LocalFile('b.mp4', 'video/mp4', b'bbb')]

    result = uploader.upload(files)

    assert put_session.request.call_count == 2
    args, kwargs = put_session.request.call_args_list[0]
    assert args == ('PUT', 'http://hum.test/api/objects/put/tok123?sig=abc')
    assert kwargs == {'data': b'aaa', 'headers': {'Content-Type': 'image/png'}}
    assert result.successful == ['http://hum.test/api/assets/x.png'] * 2
    assert results == [result]
    assert progress == [(1, 2), (2, 2)]
    assert uploader.is_open is False


def test_object_uploader_rejects_before_network(put_session, notifier):
    get_params = MagicMock(side_effect=_params)
    uploader = ObjectUploader(get_params, notifier, session=put_session, max_file_size=1 * MB)

    result = uploader.upload([LocalFile('big.png', 'image/png', declared_size=2 * MB)])

    assert result is None
    get_params.assert_not_called()
    put_session.request.assert_not_called()
    assert notifier.shown[0].title == 'File quá lớn'


def test_object_uploader_extra_files_rejected(put_session, notifier):
    uploader = ObjectUploader(_params, notifier, session=put_session, max_files=1)

    result = uploader.upload([LocalFile('a.png', 'image/png', b'a'), LocalFile('b.png', 'image/png', b'b')])

    assert put_session.request.call_count == 1
    assert len(result.successful) == 1
    assert notifier.shown[0].title == 'Quá nhiều file'


def test_per_file_error_is_not_fatal(put_session, notifier):
    put_session.request.side_effect = [make_response(403, text='expired'), make_response(200, {})]
    uploader = ObjectUploader(_params, notifier, session=put_session, max_files=2)

    result = uploader.upload([LocalFile('a.png', 'image/png', b'a'), LocalFile('b.png', 'image/png', b'b')])

    assert len(result.successful) == 1
    assert result.failed[0]['file'] == 'a.png'
    assert isinstance(result.failed[0]['error'], ApiError)


def test_image_uploader_restrictions(put_session, notifier):
    uploader = ImageUploader(_params, notifier, session=put_session)

    assert uploader.max_files == 1
    assert uploader.max_file_size == 2 * MB
    assert uploader.upload([LocalFile('a.svg', 'image/svg+xml', b'<svg/>')]) is None
    assert uploader.upload([LocalFile('a.webp', 'image/webp', b'x' * 10)]).successful
    put_session.request.assert_called_once()


def test_stored_url_falls_back_to_signed_url(put_session, notifier):
    put_session.request.return_value = make_response(200, text='')
    uploader = ObjectUploader(_params, notifier, session=put_session)

    result = uploader.upload([LocalFile('a.png', 'image/png', b'a')])

    assert result.successful == ['http://hum.test/api/objects/put/tok123']


def test_normalize_upload_url():
    assert normalize_upload_url('https://cdn.test/a.png?x=1') == 'https://cdn.test/a.png'
    assert normalize_upload_url('/api/assets/a.png') == '/api/assets/a.png'


def test_local_file_from_path(tmp_path):
    path = tmp_path / 'clip.mp4'
    path.write_bytes(b'1234')

    file = LocalFile.from_path(path)
    assert file.content_type == 'video/mp4'
    assert file.size == 4
