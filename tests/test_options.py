import pytest

from irepl.options import Edition, Executor, MainResult, ToolChain


@pytest.mark.parametrize("text,expected", [
    ("2015", Edition.E2015),
    ("2018", Edition.E2018),
    ("2021", Edition.E2021),
])
def test_edition_parse(text, expected):
    assert Edition.parse(text) is expected


@pytest.mark.parametrize("edition", list(Edition))
def test_edition_round_trip(edition):
    assert Edition.parse(str(edition)) is edition


def test_edition_unknown():
    with pytest.raises(ValueError, match="Unknown edition"):
        Edition.parse("2030")


@pytest.mark.parametrize("executor", list(Executor))
def test_executor_round_trip(executor):
    assert Executor.parse(str(executor)) is executor


def test_executor_parse_is_case_sensitive():
    with pytest.raises(ValueError, match="Unknown executor"):
        Executor.parse("Tokio")


def test_executor_main_signatures():
    assert Executor.SYNC.main_signature() == "fn main()"
    assert Executor.TOKIO.main_signature() == "#[tokio::main]async fn main()"
    assert Executor.ASYNC_STD.main_signature() == "#[async_std::main]async fn main()"


def test_executor_dependencies():
    assert Executor.SYNC.dependency() is None
    assert Executor.TOKIO.dependency() == ["tokio", "--features", '"macros" "rt-multi-thread"']
    assert Executor.ASYNC_STD.dependency() == ["async_std", "--features", "attributes"]


def test_executor_dependency_is_fresh_list():
    deps = Executor.TOKIO.dependency()
    deps.append("extra")
    assert Executor.TOKIO.dependency()[-1] == '"macros" "rt-multi-thread"'


@pytest.mark.parametrize("text,expected", [
    ("unit", MainResult.UNIT),
    ("UNIT", MainResult.UNIT),
    ("Result", MainResult.RESULT),
])
def test_main_result_parse(text, expected):
    assert MainResult.parse(text) is expected


def test_main_result_unknown():
    with pytest.raises(ValueError, match="Unknown main result type"):
        MainResult.parse("option")


def test_main_result_types_and_instances():
    assert MainResult.UNIT.type_name() == "()"
    assert MainResult.UNIT.instance() == "()"
    assert MainResult.RESULT.type_name() == "Result<(), Box<dyn std::error::Error>>"
    assert MainResult.RESULT.instance() == "Ok(())"


def test_main_result_display():
    assert str(MainResult.UNIT) == "Unit"
    assert MainResult.parse(str(MainResult.UNIT)) is MainResult.UNIT
    assert str(MainResult.RESULT) == MainResult.RESULT.type_name()


@pytest.mark.parametrize("toolchain", list(ToolChain))
def test_toolchain_round_trip(toolchain):
    assert ToolChain.parse(str(toolchain).upper()) is toolchain


def test_toolchain_args():
    assert ToolChain.STABLE.as_arg() == "+stable"
    assert ToolChain.BETA.as_arg() == "+beta"
    assert ToolChain.NIGHTLY.as_arg() == "+nightly"


def test_default_toolchain_has_no_arg():
    with pytest.raises(ValueError):
        ToolChain.DEFAULT.as_arg()


def test_toolchain_unknown():
    with pytest.raises(ValueError, match="Unknown toolchain"):
        ToolChain.parse("dev")